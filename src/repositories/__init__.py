"""Repository layer."""

from repositories.match_repository import (
    MATCH_REPOSITORY,
    MatchRepository,
    add_match,
    add_matches,
    count_matches,
    ensure_match_schema,
    fetch_matches,
    remove_match,
)

__all__ = [
    "MATCH_REPOSITORY",
    "MatchRepository",
    "add_match",
    "add_matches",
    "count_matches",
    "ensure_match_schema",
    "fetch_matches",
    "remove_match",
]
