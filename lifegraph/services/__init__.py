"""Service Layer — async orchestration around the pure core.

Invariants:
    - Services talk to storage only through core/repository_protocols.py
    - Services return tagged outcomes (core/outcomes.py), never HTTP types
"""
