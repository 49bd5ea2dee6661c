from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class KVEntryORM(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"KVEntryORM(key={self.key!r})"


KVEntry = KVEntryORM

__all__ = [
    "Base",
    "KVEntryORM",
    "KVEntry",
]
