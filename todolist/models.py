from datetime import datetime

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Boolean, DateTime, Integer, Text, func, text
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()


# ---------- Database Models ----------
class TodoDB(Base):
    __tablename__ = "todos"
    # ids must never be handed out twice, even after the newest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task: Mapped[str] = mapped_column(Text, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text("0"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"Todo(id: {self.id}, task: '{self.task}', is_completed: {self.is_completed})"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.task,
            "completed": self.is_completed,
            "created_at": self.created_at,
        }


# ---------- Data Models ----------
class Task(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    description: str
    completed: bool = False
    created_at: datetime
