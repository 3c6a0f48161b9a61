import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel
from sqlalchemy.engine import URL, make_url

ENV_PREFIX = "TODO_"


def _env(name: str, default: str) -> str:
    value = os.getenv(ENV_PREFIX + name)
    return default if value is None or value.strip() == "" else value


class Settings(BaseModel):
    db_host: str = "localhost"
    db_name: str = "todo_app"
    db_user: str = "todo_user"
    db_password: str = ""
    db_driver: str = "mysql+pymysql"
    database_url: str | None = None
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            db_host=_env("DB_HOST", "localhost"),
            db_name=_env("DB_NAME", "todo_app"),
            db_user=_env("DB_USER", "todo_user"),
            db_password=_env("DB_PASSWORD", ""),
            db_driver=_env("DB_DRIVER", "mysql+pymysql"),
            database_url=_env("DATABASE_URL", "") or None,
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            host=_env("HOST", "127.0.0.1"),
            port=int(_env("PORT", "8000")),
        )

    def url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        query = {"charset": "utf8mb4"} if self.db_driver.startswith("mysql") else {}
        return URL.create(
            drivername=self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            database=self.db_name,
            query=query,
        )

    def safe_url(self) -> str:
        # URL.render_as_string masks the password by default
        return self.url().render_as_string(hide_password=True)
