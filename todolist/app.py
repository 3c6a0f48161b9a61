import html
import logging
from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator, Iterator, TypeVar

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .logging_setup import setup_logging
from .models import Base
from .render import render_tasks
from .store import StorageUnavailable, StoreResult, TodoStore
from .utils import clean_description, coerce_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

settings = Settings.from_env()

engine = create_engine(settings.url())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging(settings.log_level)
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Schema ready on %s", settings.safe_url())
    except SQLAlchemyError as exc:
        # Keep serving; every request answers 503 until the database is back.
        logger.error("Could not prepare schema on %s: %s", settings.safe_url(), getattr(exc, "orig", exc))
    yield
    engine.dispose()


app = FastAPI(title="To-Do List", lifespan=lifespan)


def open_session(factory: sessionmaker) -> Iterator[Session]:
    db = factory()
    try:
        db.connection()
    except SQLAlchemyError as exc:
        db.close()
        logger.error("Database connection failed: %s", getattr(exc, "orig", exc))
        raise StorageUnavailable() from exc
    try:
        yield db
    finally:
        db.close()


def get_db() -> Iterator[Session]:
    yield from open_session(SessionLocal)


def get_store(db: Session = Depends(get_db)) -> TodoStore:
    return TodoStore(db)


async def submitted_form(request: Request) -> dict[str, str]:
    """Text fields of a POSTed form, blank values included; empty for other methods."""
    if request.method != "POST":
        return {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


@app.exception_handler(StorageUnavailable)
def storage_unavailable_handler(request: Request, exc: StorageUnavailable) -> HTMLResponse:
    return HTMLResponse("Database connection failed. Please try again later.", status_code=503)


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException) -> HTMLResponse:
    return HTMLResponse(html.escape(str(exc.detail)), status_code=exc.status_code, headers=exc.headers)


def unwrap(result: StoreResult[T]) -> T | None:
    if not result.ok:
        raise HTTPException(status_code=500, detail="Internal server error")
    return result.value


def back_to_list() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=302)


@app.api_route("/", methods=["GET", "POST"], response_class=HTMLResponse)
@app.api_route("/index.php", methods=["GET", "POST"], response_class=HTMLResponse, include_in_schema=False)
def index(
    request: Request,
    action: Annotated[str | None, Query()] = None,
    todo_id: Annotated[str | None, Query(alias="id")] = None,
    form: dict[str, str] = Depends(submitted_form),
    store: TodoStore = Depends(get_store),
) -> Response:
    # Branches are exclusive and checked in this order; every mutation ends in a redirect.
    if request.method == "POST" and "add_task" in form:
        description = clean_description(form.get("task"))
        if description:
            unwrap(store.create(description))
        else:
            logger.debug("Skipped blank task submission")
        return back_to_list()

    if action == "delete" and todo_id is not None:
        unwrap(store.delete(coerce_id(todo_id)))
        return back_to_list()

    if action == "toggle" and todo_id is not None:
        target = coerce_id(todo_id)
        current = unwrap(store.get_completed(target))
        if current is None:
            logger.debug("Toggle ignored, task %s does not exist", target)
        else:
            unwrap(store.set_completed(target, not current))
        return back_to_list()

    tasks = unwrap(store.list_all()) or []
    return HTMLResponse(render_tasks(tasks))
