"""Shared plumbing for the SQLAlchemy repository adapters."""

import uuid
from typing import Optional


def new_id() -> str:
    """Opaque identifier for rows that arrive without one."""
    return uuid.uuid4().hex


class SqlAlchemyRepository:
    """Base class holding the session and the commit policy.

    With auto_commit=False writes are only flushed, leaving commit or
    rollback to whoever owns the session (see DeliveryRegistrationService).
    """

    def __init__(self, db_session, auto_commit: bool = True) -> None:
        self.db = db_session
        self.auto_commit = auto_commit

    def _save(self, db_obj: Optional[object] = None) -> None:
        if db_obj is not None:
            self.db.add(db_obj)
        if self.auto_commit:
            self.db.commit()
        else:
            self.db.flush()
