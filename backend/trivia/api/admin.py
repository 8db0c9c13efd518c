from flask import Blueprint, jsonify, request, current_app

from trivia.auth import ROLES, authorized
from trivia.errors import InvalidField
from trivia.services.directory import get_user_directory
from trivia.services.question_bank import get_question_bank
from trivia.validation import parse_boolean, parse_choice, require_fields

admin = Blueprint('admin', __name__)


# ---- Accounts ----

@admin.route('/users', methods=['GET'])
@authorized(admin_only=True)
def list_users(identity):
    return jsonify([u.to_dict() for u in get_user_directory().list_accounts()])


@admin.route('/users/<string:user_id>/block', methods=['PUT'])
@authorized(admin_only=True, self_target_arg='user_id')
def block_user(identity, user_id):
    is_blocked = parse_boolean(request.get_json(silent=True), 'isBlocked')
    user = get_user_directory().set_blocked(user_id, is_blocked)
    current_app.logger.info(f"[admin-block] actor={identity.subject_id} target={user_id} blocked={is_blocked}")
    return jsonify({
        'message': f"User {'blocked' if is_blocked else 'unblocked'} successfully",
        'user': user.to_dict(),
    })


@admin.route('/users/<string:user_id>/role', methods=['PUT'])
@authorized(admin_only=True, self_target_arg='user_id')
def change_role(identity, user_id):
    role = parse_choice(request.get_json(silent=True), 'role', ROLES)
    user = get_user_directory().set_role(user_id, role)
    current_app.logger.info(f"[admin-role] actor={identity.subject_id} target={user_id} role={role}")
    return jsonify({'message': 'Role updated successfully', 'user': user.to_dict()})


# ---- Questions ----

@admin.route('/questions', methods=['GET'])
@authorized(admin_only=True)
def list_questions(identity):
    questions = get_question_bank().list_questions(request.args.get('category'))
    return jsonify([q.to_dict() for q in questions])


@admin.route('/questions', methods=['POST'])
@authorized(admin_only=True)
def add_question(identity):
    data = request.get_json(silent=True) or {}
    require_fields(data, ['questionText', 'correctAnswer', 'incorrectAnswers', 'category', 'imageRef'])
    incorrect = data['incorrectAnswers']
    if not isinstance(incorrect, list) or len(incorrect) != 3 or not all(isinstance(a, str) and a for a in incorrect):
        raise InvalidField('incorrectAnswers must hold exactly 3 answers')
    question = get_question_bank().add_question(
        question_text=data['questionText'],
        correct_answer=data['correctAnswer'],
        incorrect_answers=incorrect,
        category=data['category'],
        image_ref=data['imageRef'],
        source_ref=data.get('sourceRef'),
    )
    current_app.logger.info(f"[admin-question-add] actor={identity.subject_id} question={question.id} category={question.category}")
    return jsonify(question.to_dict()), 201


@admin.route('/questions/<string:question_id>', methods=['DELETE'])
@authorized(admin_only=True)
def delete_question(identity, question_id):
    get_question_bank().delete_question(question_id)
    current_app.logger.info(f"[admin-question-delete] actor={identity.subject_id} question={question_id}")
    return jsonify({'message': 'Question deleted successfully'})
