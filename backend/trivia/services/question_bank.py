from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from trivia import db
from trivia.errors import QuestionNotFound, UpstreamUnavailable
from trivia.models import Question
from trivia.services.games.drawing import draw_distinct_ids

ALL_CATEGORIES = 'All'
EXTENSION_KEY = 'question_bank'


def get_question_bank():
    return current_app.extensions[EXTENSION_KEY]


class QuestionBank:
    """Read access to question content for game sessions, plus admin maintenance."""

    def init_app(self, app):
        app.extensions[EXTENSION_KEY] = self

    @staticmethod
    def _filtered(query, category):
        if category and category != ALL_CATEGORIES:
            query = query.filter(Question.category == category)
        return query

    def _fail(self, action, exc):
        db.session.rollback()
        current_app.logger.error(f"[bank-error] action={action} error={exc.__class__.__name__}: {exc}")
        return UpstreamUnavailable('Question bank unavailable')

    def count_matching(self, category):
        try:
            return self._filtered(Question.query, category).count()
        except SQLAlchemyError as exc:
            raise self._fail('count_matching', exc) from exc

    def draw_distinct(self, category, n, rng=None):
        """Draw ``n`` distinct questions matching ``category`` in random order.

        Returns fewer than ``n`` only when questions vanished between the id
        scan and the fetch; callers treat that as insufficient content.
        """
        try:
            ids = [row[0] for row in self._filtered(db.session.query(Question.id), category).all()]
            drawn = draw_distinct_ids(ids, n, rng=rng)
            rows = Question.query.filter(Question.id.in_(drawn)).all() if drawn else []
        except SQLAlchemyError as exc:
            raise self._fail('draw_distinct', exc) from exc
        by_id = {q.id: q for q in rows}
        return [by_id[qid] for qid in drawn if qid in by_id]

    def list_questions(self, category=None):
        try:
            return self._filtered(Question.query, category).order_by(Question.created_at.desc()).all()
        except SQLAlchemyError as exc:
            raise self._fail('list_questions', exc) from exc

    def add_question(self, **fields):
        question = Question(**fields)
        try:
            db.session.add(question)
            db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail('add_question', exc) from exc
        return question

    def delete_question(self, question_id):
        try:
            question = db.session.get(Question, question_id)
            if question is None:
                raise QuestionNotFound()
            db.session.delete(question)
            db.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail('delete_question', exc) from exc
