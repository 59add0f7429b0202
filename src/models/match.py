"""matches table model."""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Enum, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Match(Base):
    """One recorded battle inside a season collection."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("created_at >= 0", name="ck_matches_created_at"),
        Index("idx_matches_collection", "collection"),
        Index("idx_matches_collection_order", "collection", "match_date", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    collection: Mapped[str] = mapped_column(String(128), nullable=False)
    first_1: Mapped[str] = mapped_column(String(32), nullable=False)
    first_2: Mapped[str] = mapped_column(String(32), nullable=False)
    first_3: Mapped[str] = mapped_column(String(32), nullable=False)
    second_1: Mapped[str] = mapped_column(String(32), nullable=False)
    second_2: Mapped[str] = mapped_column(String(32), nullable=False)
    second_3: Mapped[str] = mapped_column(String(32), nullable=False)
    winner: Mapped[str] = mapped_column(
        Enum(
            "FIRST",
            "SECOND",
            name="match_winner",
            native_enum=False,
        ),
        nullable=False,
    )
    ratio: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    match_date: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
