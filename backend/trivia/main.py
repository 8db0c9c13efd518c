from flask import Blueprint, request, jsonify, current_app

from trivia import db
from trivia.auth import issue_token
from trivia.errors import AccountBlocked, InvalidCredential, UsernameTaken
from trivia.models import User
from trivia.storage import store_operation
from trivia.validation import require_fields

main = Blueprint('main', __name__)

@main.route('/health')
def health():
    return jsonify({'status': 'OK'})

@main.route('/adduser', methods=['POST'])
def add_user():
    data = request.get_json(silent=True) or {}
    require_fields(data, ['username', 'password'])
    username = str(data['username'])

    with store_operation('add user'):
        if User.query.filter_by(username=username).first():
            raise UsernameTaken()
        user = User(username=username)
        user.set_password(str(data['password']))
        db.session.add(user)
        db.session.commit()

    current_app.logger.info(f"[user-add] user={user.id} username={username}")
    return jsonify(user.to_dict()), 201

@main.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    require_fields(data, ['username', 'password'])

    with store_operation('login'):
        user = User.query.filter_by(username=str(data['username'])).first()
    if not user or not user.check_password(str(data['password'])):
        raise InvalidCredential('Invalid credentials')
    if user.is_blocked:
        raise AccountBlocked()

    return jsonify({
        'token': issue_token(user),
        'userId': user.id,
        'username': user.username,
        'role': user.role,
        'createdAt': user.to_dict()['createdAt'],
    })
