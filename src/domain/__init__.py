"""Battle-record domain modules."""

from domain.common import Category, MatchPayload, MatchRecord, Trio, Winner
from domain.ratio import is_ratio_battle, weight_sum

__all__ = [
    "Category",
    "MatchPayload",
    "MatchRecord",
    "Trio",
    "Winner",
    "is_ratio_battle",
    "weight_sum",
]
