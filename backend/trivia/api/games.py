from flask import Blueprint, jsonify, request

from trivia.auth import authorized
from trivia.services.games.sessions import create_session, get_history, submit_answer

games = Blueprint('games', __name__)


@games.route('/start', methods=['POST'])
@authorized()
def start_game(identity):
    data = request.get_json(silent=True) or {}
    session, questions = create_session(
        data.get('playerId'),
        data.get('playerDisplayName'),
        data.get('category'),
    )
    return jsonify({'sessionId': session.id, 'questions': questions}), 201


@games.route('/<string:session_id>/answer', methods=['POST'])
@authorized()
def answer_question(identity, session_id):
    data = request.get_json(silent=True) or {}
    result = submit_answer(
        session_id,
        data.get('questionId'),
        answer=data.get('answer'),
        time_spent=data.get('timeSpent'),
    )
    return jsonify(result)


@games.route('/history/<string:player_id>', methods=['GET'])
@authorized()
def history(identity, player_id):
    sessions = get_history(player_id)
    return jsonify([s.to_dict() for s in sessions])
