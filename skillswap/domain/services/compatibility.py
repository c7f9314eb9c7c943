"""Skill compatibility scoring.

Pure functions shared by the match, user and session services.
"""

import math
from typing import Iterable, List, Sequence

from skillswap.domain.entities import (
    RatingEntity,
    SessionEntity,
    SessionStatus,
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative values (2.5 -> 3)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def skills_overlap(a: str, b: str) -> bool:
    """Case-insensitive substring overlap in either direction. Blank skills never overlap."""
    a = a.strip().lower()
    b = b.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def count_overlapping(candidates: Iterable[str], targets: Sequence[str]) -> int:
    """Count entries of ``candidates`` that overlap at least one of ``targets``."""
    return sum(1 for skill in candidates if any(skills_overlap(skill, t) for t in targets))


def compatibility_score(
    offers_a: Sequence[str],
    seeks_a: Sequence[str],
    offers_b: Sequence[str],
    seeks_b: Sequence[str],
) -> int:
    """Score candidate B against requester A as a 0-100 integer.

    B's offers are checked against A's seeks and B's seeks against A's
    offers; the score is the share of B's skills that found a partner.
    """
    total = len(offers_b) + len(seeks_b)
    if total == 0:
        return 0

    offers_match = count_overlapping(offers_b, seeks_a)
    seeks_match = count_overlapping(seeks_b, offers_a)

    return int(round_half_up((offers_match + seeks_match) / total * 100))


def average_rating(ratings: List[RatingEntity]) -> float:
    """Mean rating score rounded to one decimal, 0 when unrated."""
    if not ratings:
        return 0.0
    return round_half_up(sum(r.score for r in ratings) / len(ratings), 1)


def completed_session_count(sessions: List[SessionEntity]) -> int:
    return sum(1 for s in sessions if s.status == SessionStatus.COMPLETED)
