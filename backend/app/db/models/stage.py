"""Stage model — a named phase with a display color."""

from sqlalchemy import Column, Integer, String

from app.db.base import Base

DEFAULT_STAGE_COLOR = "#4f46e5"


class Stage(Base):
    __tablename__ = "stages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=False, default=DEFAULT_STAGE_COLOR, server_default=DEFAULT_STAGE_COLOR)
