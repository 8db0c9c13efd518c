import random
from typing import Iterable, List, Optional


def draw_distinct_ids(candidate_ids: Iterable[str], n: int, rng: Optional[random.Random] = None) -> List[str]:
    """Pick ``n`` distinct ids uniformly at random, without replacement.

    Candidates are de-duplicated first so a repeated id can never be drawn
    twice. Nothing is reserved: concurrent draws may pick the same questions.
    Returns every candidate (shuffled) when fewer than ``n`` exist.
    """
    rng = rng or random
    pool = list(dict.fromkeys(candidate_ids))
    return rng.sample(pool, min(n, len(pool)))


def shuffled_options(correct_answer: str, incorrect_answers: Iterable[str], rng: Optional[random.Random] = None) -> List[str]:
    """The four answer options in a fresh random order, correct one unmarked."""
    rng = rng or random
    options = list(incorrect_answers) + [correct_answer]
    rng.shuffle(options)
    return options
