"""Dependency injection for SkillSwap API.

This module wires the Firestore repository into the domain services and
resolves the authenticated user for protected endpoints.
"""

from functools import lru_cache
from typing import (
    Annotated,
    Optional,
)

from fastapi import (
    Depends,
    Request,
)
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBearer,
)

from skillswap.core.logging import logger
from skillswap.domain.entities import UserEntity
from skillswap.domain.exceptions import (
    AuthenticationError,
    InvalidTokenError,
)
from skillswap.domain.repositories import UserRepositoryInterface
from skillswap.domain.services import (
    MatchDomainService,
    MessageDomainService,
    SessionDomainService,
    UserDomainService,
)
from skillswap.infrastructure.firestore import FirestoreUserRepository
from skillswap.shared.utils.auth import verify_token

security = HTTPBearer(auto_error=False)


@lru_cache
def get_user_repository() -> UserRepositoryInterface:
    """Get the Firestore user repository singleton.

    Returns:
        UserRepositoryInterface: The user repository instance
    """
    return FirestoreUserRepository()


UserRepositoryDep = Annotated[UserRepositoryInterface, Depends(get_user_repository)]


def get_user_service(user_repository: UserRepositoryDep) -> UserDomainService:
    return UserDomainService(user_repository)


def get_match_service(user_repository: UserRepositoryDep) -> MatchDomainService:
    return MatchDomainService(user_repository)


def get_session_service(user_repository: UserRepositoryDep) -> SessionDomainService:
    return SessionDomainService(user_repository)


def get_message_service(user_repository: UserRepositoryDep) -> MessageDomainService:
    return MessageDomainService(user_repository)


async def get_current_user(
    request: Request,
    user_repository: UserRepositoryDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserEntity:
    """Resolve the user behind the bearer token.

    Args:
        request: The incoming request
        user_repository: Repository used to load the user
        credentials: The HTTP authorization credentials, if any

    Returns:
        UserEntity: The authenticated user

    Raises:
        AuthenticationError: If no token was sent or its user no longer exists
        InvalidTokenError: If the token is malformed, tampered with or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    user_id = verify_token(credentials.credentials)
    if user_id is None:
        raise InvalidTokenError()

    user = await user_repository.get_user_by_id(user_id)
    if user is None:
        logger.warning("token_user_not_found", user_id=user_id)
        raise AuthenticationError("User not found")

    request.state.user_id = user.id
    return user


# Type aliases for cleaner endpoint signatures
UserServiceDep = Annotated[UserDomainService, Depends(get_user_service)]
MatchServiceDep = Annotated[MatchDomainService, Depends(get_match_service)]
SessionServiceDep = Annotated[SessionDomainService, Depends(get_session_service)]
MessageServiceDep = Annotated[MessageDomainService, Depends(get_message_service)]
CurrentUser = Annotated[UserEntity, Depends(get_current_user)]
