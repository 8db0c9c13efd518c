"""User Directory: account lookups for the authorization pipeline and admin routes.

Every call reads the current row; nothing is cached between requests so a
block or role change is visible on the very next request.
"""

from collections import namedtuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from trivia import db
from trivia.errors import AccountNotFound, UpstreamUnavailable
from trivia.models import User

Account = namedtuple('Account', ['id', 'role', 'is_blocked'])

EXTENSION_KEY = 'user_directory'


def get_user_directory():
    return current_app.extensions[EXTENSION_KEY]


class UserDirectory:

    def init_app(self, app):
        app.extensions[EXTENSION_KEY] = self

    def _load(self, user_id):
        return db.session.get(User, user_id)

    def _fail(self, action, exc):
        db.session.rollback()
        current_app.logger.error(f"[directory-error] action={action} error={exc.__class__.__name__}: {exc}")
        return UpstreamUnavailable()

    def get_account(self, user_id):
        """Return the current Account for ``user_id`` or None when it does not exist."""
        try:
            user = self._load(user_id)
        except SQLAlchemyError as exc:
            raise self._fail('get_account', exc) from exc
        if user is None:
            return None
        return Account(id=user.id, role=user.role, is_blocked=bool(user.is_blocked))

    def list_accounts(self):
        try:
            return User.query.order_by(User.created_at.asc()).all()
        except SQLAlchemyError as exc:
            raise self._fail('list_accounts', exc) from exc

    def _update(self, user_id, action, **changes):
        try:
            user = self._load(user_id)
            if user is None:
                raise AccountNotFound()
            for name, value in changes.items():
                setattr(user, name, value)
            db.session.add(user)
            db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail(action, exc) from exc
        return user

    def set_blocked(self, user_id, is_blocked):
        return self._update(user_id, 'set_blocked', is_blocked=is_blocked)

    def set_role(self, user_id, role):
        return self._update(user_id, 'set_role', role=role)
