"""Domain services package.

Domain services contain business logic that spans more than one entity or
needs repository access.
"""

from skillswap.domain.services.match_service import MatchDomainService
from skillswap.domain.services.message_service import MessageDomainService
from skillswap.domain.services.session_service import SessionDomainService
from skillswap.domain.services.user_service import UserDomainService

__all__ = [
    "MatchDomainService",
    "MessageDomainService",
    "SessionDomainService",
    "UserDomainService",
]
