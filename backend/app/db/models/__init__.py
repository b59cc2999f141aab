"""Re-export all models so Base.metadata sees them."""

from app.db.models.milestone import Milestone
from app.db.models.stage import Stage

__all__ = [
    "Milestone",
    "Stage",
]
