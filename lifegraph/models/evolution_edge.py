"""EvolutionEdge ORM — memoized transition board -> next board.

Invariants:
    - from_board_id is the primary key: at most one outgoing edge per board
    - Self-loops allowed (still life maps to itself)
    - Both ends reference boards.id

Design Decisions:
    - No surrogate id: the source board identifies the edge
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from lifegraph.db.base import Base
from lifegraph.models.board import BOARD_ID_LENGTH


class EvolutionEdge(Base):
    """Directed edge in the evolution graph."""
    __tablename__ = "evolution_edges"

    from_board_id: Mapped[str] = mapped_column(
        String(BOARD_ID_LENGTH),
        ForeignKey("boards.id", ondelete="CASCADE"),
        primary_key=True,
    )
    to_board_id: Mapped[str] = mapped_column(
        String(BOARD_ID_LENGTH),
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
