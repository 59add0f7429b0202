"""ORM models."""

from models.base import Base
from models.match import Match

__all__ = [
    "Base",
    "Match",
]
