from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def smart_transaction(session: Session) -> Iterator:
    """
    Context manager that runs a unit of work on the given Session.
    If a SAVEPOINT is already open, nest another one (begin_nested) and leave
    the outer transaction to its owner.
    Otherwise commit on success and roll back on error, whether the session
    autobegan its transaction during earlier reads or not.
    Usage:
        with smart_transaction(db):
            ... DB work ...
    """
    if session.in_nested_transaction():
        with session.begin_nested():
            yield
        return
    try:
        yield
        session.commit()
    except Exception:
        session.rollback()
        raise
