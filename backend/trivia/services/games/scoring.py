from collections import namedtuple

from trivia.models import GameSession, QuestionRecord

NO_ANSWER = 'No answer'

AnswerOutcome = namedtuple('AnswerOutcome', ['user_answer', 'is_correct', 'time_spent', 'timed_out'])


def evaluate_answer(correct_answer: str, answer, time_spent: float, time_limit: int = 20) -> AnswerOutcome:
    """Judge one submitted answer against the snapshotted correct answer.

    An empty or missing answer, or one reported at or past ``time_limit``
    seconds, is timed out and never correct. Otherwise the comparison is exact
    string equality: case-sensitive, no trimming.
    """
    timed_out = not answer or time_spent >= time_limit
    is_correct = (not timed_out) and answer == correct_answer
    return AnswerOutcome(
        user_answer=answer if answer else NO_ANSWER,
        is_correct=is_correct,
        time_spent=time_spent,
        timed_out=timed_out,
    )


def apply_outcome(session: GameSession, record: QuestionRecord, outcome: AnswerOutcome, points: int = 100) -> None:
    """Write the outcome onto the record and bump the session counters.

    +points and one correct for a correct answer; one incorrect otherwise
    (timed-out answers included). Does not commit.
    """
    record.user_answer = outcome.user_answer
    record.is_correct = outcome.is_correct
    record.time_spent = outcome.time_spent
    record.timed_out = outcome.timed_out
    if outcome.is_correct:
        session.correct_count = (session.correct_count or 0) + 1
        session.score = (session.score or 0) + points
    else:
        session.incorrect_count = (session.incorrect_count or 0) + 1
