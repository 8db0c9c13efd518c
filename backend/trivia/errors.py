"""Error taxonomy shared by the authorization pipeline and the game services.

Every failure the API reports is a ``TriviaError`` subclass. ``kind`` is the
machine-readable name clients branch on; ``status_code`` is the HTTP status
the application factory's error handler responds with.
"""


class TriviaError(Exception):
    kind = 'TriviaError'
    status_code = 500
    default_message = 'Internal Server Error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.message, 'kind': self.kind}


# ---- Authorization ----

class Unauthenticated(TriviaError):
    kind = 'Unauthenticated'
    status_code = 401
    default_message = 'Access token required'


class InvalidCredential(TriviaError):
    kind = 'InvalidCredential'
    status_code = 401
    default_message = 'Invalid or expired token'


class AccountBlocked(TriviaError):
    kind = 'AccountBlocked'
    status_code = 403
    default_message = 'User is blocked'


class InsufficientPrivilege(TriviaError):
    kind = 'InsufficientPrivilege'
    status_code = 403
    default_message = 'Admin access required'


class ForbiddenSelfTarget(TriviaError):
    kind = 'ForbiddenSelfTarget'
    status_code = 403
    default_message = 'Cannot apply this change to your own account'


class AccountNotFound(TriviaError):
    kind = 'AccountNotFound'
    status_code = 404
    default_message = 'User not found'


class UsernameTaken(TriviaError):
    kind = 'UsernameTaken'
    status_code = 400
    default_message = 'Username already exists'


# ---- Request validation ----

class MissingField(TriviaError):
    kind = 'MissingField'
    status_code = 400
    default_message = 'Missing required field'


class InvalidField(TriviaError):
    kind = 'InvalidField'
    status_code = 400
    default_message = 'Invalid field value'


# ---- Game sessions ----

class InsufficientContent(TriviaError):
    kind = 'InsufficientContent'
    status_code = 404
    default_message = 'Not enough questions available'


class SessionNotFound(TriviaError):
    kind = 'SessionNotFound'
    status_code = 404
    default_message = 'Game not found'


class QuestionNotInSession(TriviaError):
    kind = 'QuestionNotInSession'
    status_code = 404
    default_message = 'Question not found in this game'


class QuestionAlreadyAnswered(TriviaError):
    kind = 'QuestionAlreadyAnswered'
    status_code = 409
    default_message = 'Question already answered in this game'


class QuestionNotFound(TriviaError):
    kind = 'QuestionNotFound'
    status_code = 404
    default_message = 'Question not found'


# ---- Collaborators ----

class UpstreamUnavailable(TriviaError):
    kind = 'UpstreamUnavailable'
    status_code = 500
    default_message = 'Error verifying user status'


class StorageUnavailable(TriviaError):
    kind = 'StorageUnavailable'
    status_code = 500
    default_message = 'Storage unavailable'
