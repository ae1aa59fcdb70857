"""Infrastructure Layer — storage backends, database sessions, logging.

Invariants:
    - Every backend satisfies core.repository_protocols.BoardRepository
    - Driver exceptions never leave this layer unmapped (StorageError)
"""
