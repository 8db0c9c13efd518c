import os
import sys
from datetime import timedelta

import pytest

# Ensure the backend root (containing the `trivia` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from flask_jwt_extended import create_access_token

from trivia import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    JWT_SECRET_KEY = 'test-jwt-secret-key-long-enough-for-hs256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    ANSWER_TIME_LIMIT_SEC = 20
    POINTS_PER_CORRECT_ANSWER = 100
    HISTORY_LIMIT = 10
    ALLOW_ANSWER_REVISION = False
    CORS_ORIGINS = ['http://localhost:3000']
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import trivia.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_user(flask_app):
    from trivia.models import User

    def _make(username, role='user', blocked=False, password='password'):
        user = User(username=username, role=role, is_blocked=blocked)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture()
def auth_header(flask_app):
    """Bearer header for an account; claims default to the account's role."""

    def _header(user, role=None, expires_delta=None, **claims):
        additional = {'role': role or user.role}
        additional.update(claims)
        kwargs = {'expires_delta': expires_delta} if expires_delta is not None else {}
        token = create_access_token(identity=user.id, additional_claims=additional, **kwargs)
        return {'Authorization': f'Bearer {token}'}

    return _header


@pytest.fixture()
def player(make_user):
    return make_user('player1')


@pytest.fixture()
def admin_user(make_user):
    return make_user('admin', role='admin')


@pytest.fixture()
def player_headers(player, auth_header):
    return auth_header(player)


@pytest.fixture()
def admin_headers(admin_user, auth_header):
    return auth_header(admin_user)


@pytest.fixture()
def seed_questions(flask_app):
    from trivia.models import Question

    def _seed(category='Capitales', count=10, prefix=None):
        prefix = prefix or category
        questions = []
        for i in range(count):
            q = Question(
                question_text=f'{prefix} question {i}?',
                correct_answer=f'{prefix} Answer {i}',
                incorrect_answers=[f'{prefix} Wrong {i}A', f'{prefix} Wrong {i}B', f'{prefix} Wrong {i}C'],
                category=category,
                image_ref=f'http://example.com/{prefix}/{i}.jpg',
                source_ref=f'Q{i}',
            )
            db.session.add(q)
            questions.append(q)
        db.session.commit()
        return questions

    return _seed
