import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import Task, TodoDB

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: T | None = None
    error: SQLAlchemyError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TodoStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _fault(self, operation: str, exc: SQLAlchemyError) -> StoreResult:
        self.db.rollback()
        logger.error("Statement failed during %s", operation, exc_info=exc)
        return StoreResult(error=exc)

    def create(self, description: str) -> StoreResult[None]:
        try:
            todo = TodoDB(task=description)
            self.db.add(todo)
            self.db.commit()
            self.db.refresh(todo)
        except SQLAlchemyError as exc:
            return self._fault("create", exc)
        logger.info("Created task %s", todo.id)
        return StoreResult()

    def delete(self, todo_id: int) -> StoreResult[None]:
        try:
            deleted = self.db.query(TodoDB).filter(TodoDB.id == todo_id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as exc:
            return self._fault("delete", exc)
        logger.info("Deleted task %s (%d row(s))", todo_id, deleted)
        return StoreResult()

    def get_completed(self, todo_id: int) -> StoreResult[bool]:
        try:
            completed = self.db.query(TodoDB.is_completed).filter(TodoDB.id == todo_id).scalar()
        except SQLAlchemyError as exc:
            return self._fault("get_completed", exc)
        return StoreResult(value=None if completed is None else bool(completed))

    def set_completed(self, todo_id: int, completed: bool) -> StoreResult[None]:
        try:
            self.db.query(TodoDB).filter(TodoDB.id == todo_id).update(
                {TodoDB.is_completed: completed}, synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            return self._fault("set_completed", exc)
        logger.info("Task %s completed=%s", todo_id, completed)
        return StoreResult()

    def list_all(self) -> StoreResult[list[Task]]:
        try:
            rows = (
                self.db.query(TodoDB)
                .order_by(TodoDB.is_completed.asc(), TodoDB.created_at.desc(), TodoDB.id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            return self._fault("list_all", exc)
        return StoreResult(value=[Task(**row.to_dict()) for row in rows])


class StorageUnavailable(Exception):
    pass
