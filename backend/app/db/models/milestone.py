"""Milestone model — a dated, located event belonging to one stage."""

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text

from app.db.base import Base


class Milestone(Base):
    __tablename__ = "milestones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Caller-supplied ordering number; not unique, not updatable through the API
    item = Column(Integer, nullable=False)
    # No ondelete: deleting a referenced stage is refused by the database
    stage_id = Column(Integer, ForeignKey("stages.id"), nullable=False, index=True)

    start_date = Column(Date, nullable=False)
    location = Column(String(255), nullable=False)
    completion_date = Column(Date, nullable=True)
    comments = Column(Text, nullable=True)
    illustration = Column(String(255), nullable=True)
