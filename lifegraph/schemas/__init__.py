"""Schemas — Pydantic models for the HTTP boundary.

Invariants:
    - Field names serialize as camelCase (boardId, liveCells)
    - Domain rules (bounds, steps) are enforced by core/validate_board.py,
      schemas only enforce JSON shape
"""
