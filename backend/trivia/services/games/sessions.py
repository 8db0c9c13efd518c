"""Game session lifecycle: creation, per-question answers and history."""

from flask import current_app
from sqlalchemy.orm import selectinload

from trivia import db
from trivia.errors import (
    InsufficientContent,
    MissingField,
    QuestionAlreadyAnswered,
    QuestionNotInSession,
    SessionNotFound,
)
from trivia.models import GameSession, QuestionRecord
from trivia.services.games.drawing import shuffled_options
from trivia.services.games.scoring import apply_outcome, evaluate_answer
from trivia.services.question_bank import ALL_CATEGORIES, get_question_bank
from trivia.storage import store_operation
from trivia.validation import check_max_length, parse_optional_answer, parse_time_spent, require_fields

QUESTIONS_PER_SESSION = 5
PLAYER_FIELD_MAX_LENGTH = 64


def player_view(question, rng=None):
    """Player-facing question: never says which option is correct."""
    return {
        'id': question.id,
        'questionText': question.question_text,
        'imageRef': question.image_ref,
        'options': shuffled_options(question.correct_answer, question.incorrect_answers, rng=rng),
    }


def create_session(player_id, player_display_name, category=None, question_bank=None, rng=None):
    """Create a five-question session and return ``(session, questions)``.

    ``questions`` is the player-facing view of the drawn questions in session
    order. Nothing is written when the category holds fewer than five
    questions.
    """
    if not player_id or not player_display_name:
        raise MissingField('playerId and playerDisplayName are required')
    player = {'playerId': player_id, 'playerDisplayName': player_display_name}
    for field in player:
        check_max_length(player, field, PLAYER_FIELD_MAX_LENGTH)
    category = category or ALL_CATEGORIES
    bank = question_bank or get_question_bank()

    available = bank.count_matching(category)
    if available < QUESTIONS_PER_SESSION:
        current_app.logger.info(f"[session-refused] player={player_id} category={category} available={available}")
        raise InsufficientContent()

    drawn = bank.draw_distinct(category, QUESTIONS_PER_SESSION, rng=rng)
    if len(drawn) < QUESTIONS_PER_SESSION:
        raise InsufficientContent()

    questions = [player_view(q, rng=rng) for q in drawn]
    session = GameSession(
        player_id=player_id,
        player_display_name=player_display_name,
        category=category,
        total_questions=QUESTIONS_PER_SESSION,
        correct_count=0,
        incorrect_count=0,
        score=0,
    )
    for position, q in enumerate(drawn):
        session.records.append(QuestionRecord(
            position=position,
            question_id=q.id,
            question_text=q.question_text,
            correct_answer=q.correct_answer,
            user_answer=None,
            is_correct=False,
            time_spent=0,
            timed_out=False,
        ))

    with store_operation('create session'):
        db.session.add(session)
        db.session.commit()
    current_app.logger.info(f"[session-create] session={session.id} player={player_id} category={category}")
    return session, questions


def submit_answer(session_id, question_id, answer=None, time_spent=None):
    """Evaluate one answer for one question of a session.

    Returns ``{isCorrect, correctAnswer, score, questionsAnswered}``.
    """
    require_fields({'questionId': question_id}, ['questionId'])
    if time_spent is None:
        raise MissingField('Missing required field: timeSpent')
    time_spent = parse_time_spent(time_spent)
    answer = parse_optional_answer(answer)

    cfg = current_app.config
    with store_operation('load session'):
        session = db.session.get(GameSession, session_id)
        record = session.find_record(question_id) if session is not None else None
    if session is None:
        raise SessionNotFound()
    if record is None:
        raise QuestionNotInSession()
    if record.is_answered and not cfg.get('ALLOW_ANSWER_REVISION', False):
        current_app.logger.warning(f"[answer-repeat] session={session.id} question={question_id}")
        raise QuestionAlreadyAnswered()

    outcome = evaluate_answer(
        record.correct_answer,
        answer,
        time_spent,
        time_limit=int(cfg.get('ANSWER_TIME_LIMIT_SEC', 20)),
    )
    apply_outcome(session, record, outcome, points=int(cfg.get('POINTS_PER_CORRECT_ANSWER', 100)))

    with store_operation('save answer'):
        db.session.add(session)
        db.session.commit()
    current_app.logger.info(
        f"[answer] session={session.id} question={question_id} correct={outcome.is_correct} "
        f"timed_out={outcome.timed_out} score={session.score} answered={session.questions_answered}"
    )
    return {
        'isCorrect': outcome.is_correct,
        'correctAnswer': record.correct_answer,
        'score': session.score,
        'questionsAnswered': session.questions_answered,
    }


def get_history(player_id, limit=None):
    """Most recent sessions of a player first; an empty list when there are none."""
    if limit is None:
        limit = int(current_app.config.get('HISTORY_LIMIT', 10))
    with store_operation('load history'):
        return (
            GameSession.query.options(selectinload(GameSession.records))
            .filter_by(player_id=player_id)
            .order_by(GameSession.completed_at.desc())
            .limit(limit)
            .all()
        )
