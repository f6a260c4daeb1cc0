"""SQLAlchemy model mirroring the JSON concept records."""
from __future__ import annotations

from sqlalchemy import Column, Integer, String, Text

from .session import Base


class ConceptRecord(Base):
    __tablename__ = "conceptos"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted max row again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
