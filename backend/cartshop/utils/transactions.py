from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """
    Run a block of DB work as one unit: commit when the block finishes,
    roll back everything written since the last commit when it raises.
    Usage:
        with atomic(db):
            ... DB work ...
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
