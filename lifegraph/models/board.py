"""Board ORM — one row per distinct board state (node of the evolution graph).

Invariants:
    - id is the content hash (core/board_identity.py), never generated here
    - live_cells stored exactly as produced: input order and duplicates kept
    - size is 1..1000 (enforced by core/validate_board.py before insert)

Design Decisions:
    - JSON column for live cells: a board is always read and written whole
    - updated_at refreshed on every upsert; rows are never deleted outside tests
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from lifegraph.db.base import Base

BOARD_ID_LENGTH = 64


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Board(Base):
    """A stored board state."""
    __tablename__ = "boards"

    id: Mapped[str] = mapped_column(String(BOARD_ID_LENGTH), primary_key=True)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    live_cells: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )
