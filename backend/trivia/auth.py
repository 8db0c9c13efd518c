"""Authorization pipeline for privileged routes.

Stages run in order and stop at the first failure:

1. token validator  -> Unauthenticated / InvalidCredential
2. block gate       -> AccountBlocked / UpstreamUnavailable
3. role guard       -> InsufficientPrivilege          (admin routes)
4. self-target guard -> ForbiddenSelfTarget            (routes acting on another account)

The verified ``Identity`` is handed to the view as its first argument; it is
never stashed on ``g`` or any other request-global.
"""

from collections import namedtuple
from functools import wraps

import jwt as pyjwt
from flask import current_app, has_request_context, request
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from trivia.errors import (
    AccountBlocked,
    AccountNotFound,
    ForbiddenSelfTarget,
    InsufficientPrivilege,
    InvalidCredential,
    Unauthenticated,
)
from trivia.services.directory import get_user_directory

Identity = namedtuple('Identity', ['subject_id', 'role'])

ADMIN_ROLE = 'admin'
ROLES = ('admin', 'user')


def issue_token(user) -> str:
    """Signed, time-bounded assertion of the account id and role."""
    return create_access_token(identity=user.id, additional_claims={'role': user.role})


def _deny(stage, exc, subject=None):
    path = request.path if has_request_context() else None
    current_app.logger.warning(f"[auth-deny] stage={stage} kind={exc.kind} subject={subject} path={path}")
    return exc


def validate_token(authorization) -> Identity:
    if not authorization:
        raise _deny('token', Unauthenticated())
    parts = authorization.split(' ', 1)
    token = parts[1].strip() if len(parts) == 2 and parts[0].lower() == 'bearer' else ''
    if not token:
        raise _deny('token', Unauthenticated())
    try:
        claims = decode_token(token)
    except (pyjwt.PyJWTError, JWTExtendedException) as exc:
        raise _deny('token', InvalidCredential()) from exc
    subject_id, role = claims.get('sub'), claims.get('role')
    if not subject_id or role not in ROLES:
        raise _deny('token', InvalidCredential())
    return Identity(subject_id=subject_id, role=role)


def check_not_blocked(identity: Identity, directory=None) -> None:
    directory = directory or get_user_directory()
    account = directory.get_account(identity.subject_id)
    if account is None:
        raise _deny('block', InvalidCredential('Account no longer exists'), identity.subject_id)
    if account.is_blocked:
        raise _deny('block', AccountBlocked(), identity.subject_id)


def require_admin(identity: Identity) -> None:
    if identity.role != ADMIN_ROLE:
        raise _deny('role', InsufficientPrivilege(), identity.subject_id)


def guard_self_target(identity: Identity, target_id, directory=None) -> None:
    directory = directory or get_user_directory()
    target = directory.get_account(target_id)
    if target is None:
        raise _deny('self-target', AccountNotFound(), identity.subject_id)
    if target.id == identity.subject_id:
        raise _deny('self-target', ForbiddenSelfTarget(), identity.subject_id)


def authorize_request(authorization, admin_only=False, target_id=None, directory=None) -> Identity:
    """Run the pipeline for one request and return the verified identity."""
    identity = validate_token(authorization)
    check_not_blocked(identity, directory)
    if admin_only:
        require_admin(identity)
    if target_id is not None:
        guard_self_target(identity, target_id, directory)
    return identity


def authorized(admin_only=False, self_target_arg=None):
    """Route decorator running the pipeline; the view receives ``identity`` first.

    ``self_target_arg`` names the URL parameter holding the target account id.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            target_id = kwargs.get(self_target_arg) if self_target_arg else None
            identity = authorize_request(
                request.headers.get('Authorization'),
                admin_only=admin_only,
                target_id=target_id,
            )
            return view(identity, *args, **kwargs)
        return wrapper
    return decorator
