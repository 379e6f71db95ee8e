# src/eisen_triage/triage/decide.py

from __future__ import annotations

from .models import Quadrant

# Scores at or above this count as "high" on either axis.
HIGH = 3


def decide_quadrant(urgency: int, importance: int) -> Quadrant:
    """
    Map (urgency, importance) to a quadrant. First matching rule wins:

    1. urgent and important       -> do
    2. not urgent, important      -> schedule
    3. urgent, not important      -> delegate
    4. anything else              -> eliminate
    """
    if urgency >= HIGH and importance >= HIGH:
        return Quadrant.DO
    if urgency <= HIGH - 1 and importance >= HIGH:
        return Quadrant.SCHEDULE
    if urgency >= HIGH and importance <= HIGH - 1:
        return Quadrant.DELEGATE
    return Quadrant.ELIMINATE


def is_borderline(urgency: int, importance: int, quadrant: Quadrant) -> bool:
    """
    True when the heuristic is least confident about `quadrant`.

    Two gates, either one is enough:
    - edge-and-sum: one axis sits on 2 or 3 and the total is mid-range (4..7)
    - flip-candidate: the scores are the weakest member of their quadrant
    """
    u, i = urgency, importance

    edge = u in (2, 3) or i in (2, 3)
    sum_gate = 4 <= u + i <= 7

    flip_candidate = (
        (quadrant == Quadrant.DO and u == 3 and i == 3)
        or (quadrant == Quadrant.SCHEDULE and u == 2 and i >= 3)
        or (quadrant == Quadrant.DELEGATE and u >= 3 and i == 2)
        or (quadrant == Quadrant.ELIMINATE and u <= 2 and i <= 2)
    )
    return (edge and sum_gate) or flip_candidate
