from trivia import db, bcrypt
from datetime import datetime, timezone
import uuid


def generate_id():
    """Opaque identifier for directory, bank and session records."""
    return uuid.uuid4().hex


def utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value):
    return value.isoformat() if value else None


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(128), nullable=False)
    role = db.Column(db.String(16), nullable=False, default='user')  # admin, user
    is_blocked = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'role': self.role,
            'isBlocked': self.is_blocked,
            'createdAt': _isoformat(self.created_at),
        }


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    question_text = db.Column(db.Text, nullable=False)
    correct_answer = db.Column(db.String(255), nullable=False)
    incorrect_answers = db.Column(db.JSON, nullable=False)  # exactly 3 distractors
    category = db.Column(db.String(64), nullable=False, index=True)
    image_ref = db.Column(db.String(512), nullable=False)
    source_ref = db.Column(db.String(64), nullable=True)  # id in the external knowledge base
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'questionText': self.question_text,
            'correctAnswer': self.correct_answer,
            'incorrectAnswers': list(self.incorrect_answers or []),
            'category': self.category,
            'imageRef': self.image_ref,
            'sourceRef': self.source_ref,
            'createdAt': _isoformat(self.created_at),
        }


class GameSession(db.Model):
    __tablename__ = 'game_session'
    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    player_id = db.Column(db.String(64), nullable=False, index=True)
    player_display_name = db.Column(db.String(64), nullable=False)
    category = db.Column(db.String(64), nullable=False, default='All')
    total_questions = db.Column(db.Integer, nullable=False, default=5)
    correct_count = db.Column(db.Integer, nullable=False, default=0)
    incorrect_count = db.Column(db.Integer, nullable=False, default=0)
    score = db.Column(db.Integer, nullable=False, default=0)
    # Stamped at creation; history is ordered by it
    completed_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    records = db.relationship(
        'QuestionRecord',
        back_populates='session',
        order_by='QuestionRecord.position',
        cascade='all, delete-orphan',
    )

    @property
    def questions_answered(self):
        return (self.correct_count or 0) + (self.incorrect_count or 0)

    def find_record(self, question_id):
        for record in self.records:
            if record.question_id == question_id:
                return record
        return None

    def to_dict(self, include_records=True):
        data = {
            'id': self.id,
            'playerId': self.player_id,
            'playerDisplayName': self.player_display_name,
            'category': self.category,
            'totalQuestions': self.total_questions,
            'correctCount': self.correct_count,
            'incorrectCount': self.incorrect_count,
            'score': self.score,
            'completedAt': _isoformat(self.completed_at),
        }
        if include_records:
            data['questions'] = [r.to_dict() for r in self.records]
        return data


class QuestionRecord(db.Model):
    __tablename__ = 'question_record'
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.String(32), db.ForeignKey('game_session.id'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False)
    # Weak reference: the bank may edit or delete the question without touching the session
    question_id = db.Column(db.String(32), nullable=False)
    question_text = db.Column(db.Text, nullable=False)
    correct_answer = db.Column(db.String(255), nullable=False)
    user_answer = db.Column(db.Text, nullable=True)
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    time_spent = db.Column(db.Float, nullable=False, default=0)
    timed_out = db.Column(db.Boolean, nullable=False, default=False)
    session = db.relationship('GameSession', back_populates='records')

    __table_args__ = (
        db.UniqueConstraint('session_id', 'question_id', name='uq_record_session_question'),
        db.UniqueConstraint('session_id', 'position', name='uq_record_session_position'),
    )

    @property
    def is_answered(self):
        return self.user_answer is not None

    def to_dict(self):
        return {
            'questionId': self.question_id,
            'questionText': self.question_text,
            # Revealed only once the question has been answered
            'correctAnswer': self.correct_answer if self.is_answered else None,
            'userAnswer': self.user_answer,
            'isCorrect': self.is_correct,
            'timeSpent': self.time_spent,
            'timedOut': self.timed_out,
        }
