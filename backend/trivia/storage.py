from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from trivia import db
from trivia.errors import StorageUnavailable


@contextmanager
def store_operation(action: str):
    """Run session-store reads/writes, surfacing driver failures as StorageUnavailable.

    The transaction is rolled back so no partial write survives the request.
    """
    try:
        yield db.session
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[storage-error] action={action} error={exc.__class__.__name__}: {exc}")
        raise StorageUnavailable(f'Storage unavailable while trying to {action}') from exc
