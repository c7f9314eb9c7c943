"""Rating domain entity for SkillSwap."""

import uuid
from datetime import datetime
from typing import Optional

from skillswap.domain.exceptions import ValidationError
from skillswap.shared.utils.time import (
    ensure_utc,
    utc_now,
)

MIN_SCORE = 1
MAX_SCORE = 5


class RatingEntity:
    """A rating left by one user, stored on the rated user's record only."""

    def __init__(
        self,
        from_user_id: str,
        score: int,
        comment: str = "",
        created_at: Optional[datetime] = None,
        rating_id: Optional[str] = None,
    ):
        if isinstance(score, bool) or not isinstance(score, int) or not MIN_SCORE <= score <= MAX_SCORE:
            raise ValidationError(
                f"Score must be an integer between {MIN_SCORE} and {MAX_SCORE}", field="score"
            )
        self.id = rating_id or uuid.uuid4().hex
        self.from_user_id = from_user_id
        self.score = score
        self.comment = comment or ""
        self.created_at = ensure_utc(created_at) or utc_now()

    def __repr__(self) -> str:
        return f"RatingEntity(from='{self.from_user_id}', score={self.score})"
