"""ORM Models — SQLAlchemy declarative models for the evolution graph.

Invariants:
    - All models inherit from Base (db/base.py)
    - Board is the node table, EvolutionEdge the memoized transition table

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from lifegraph.models.board import Board  # noqa: F401
from lifegraph.models.evolution_edge import EvolutionEdge  # noqa: F401
