"""This file contains the authentication utilities for the application."""

import secrets
from datetime import (
    UTC,
    datetime,
    timedelta,
)
from typing import Optional

from jose import (
    ExpiredSignatureError,
    JWTError,
    jwt,
)

from skillswap.constants.auth import (
    ACCESS_TOKEN_EXPIRE_DAYS_DEFAULT,
    JWT_ALGORITHM_DEFAULT,
    TOKEN_TYPE_ACCESS,
)
from skillswap.core.config import settings
from skillswap.core.logging import logger
from skillswap.schemas.auth import Token


def _jwt_config() -> tuple[str, str]:
    secret_key = settings.JWT_SECRET_KEY
    algorithm = settings.JWT_ALGORITHM or JWT_ALGORITHM_DEFAULT
    if not secret_key:
        logger.error("jwt_secret_key_not_configured")
        raise ValueError("JWT secret key is not configured")
    return secret_key, algorithm


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> Token:
    """Create a new access token for a user.

    Args:
        user_id: The user ID stored in the ``sub`` claim.
        expires_delta: Optional expiration time delta.

    Returns:
        Token: The generated access token.

    Raises:
        ValueError: If user_id is invalid or JWT creation fails.
    """
    if not user_id or not isinstance(user_id, str):
        raise ValueError("User ID must be a non-empty string")

    issued_at = datetime.now(UTC)
    if expires_delta:
        expire = issued_at + expires_delta
    else:
        expire_days = settings.JWT_ACCESS_TOKEN_EXPIRE_DAYS or ACCESS_TOKEN_EXPIRE_DAYS_DEFAULT
        expire = issued_at + timedelta(days=expire_days)

    jti = f"{user_id}-{issued_at.timestamp()}-{secrets.token_hex(8)}"

    to_encode = {
        "sub": user_id,
        "exp": expire,
        "iat": issued_at,
        "jti": jti,
        "type": TOKEN_TYPE_ACCESS,
    }

    secret_key, algorithm = _jwt_config()
    try:
        encoded_jwt = jwt.encode(to_encode, secret_key, algorithm=algorithm)
    except JWTError as e:
        logger.error("token_creation_failed", user_id=user_id, error=str(e), exc_info=True)
        raise ValueError(f"Failed to create access token: {str(e)}")

    logger.info(
        "token_created",
        user_id=user_id,
        expires_at=expire.isoformat(),
        algorithm=algorithm,
        jti=jti,
    )
    return Token(access_token=encoded_jwt, expires_at=expire)


def verify_token(token: str) -> Optional[str]:
    """Verify a JWT token and return the user ID.

    Args:
        token: The JWT token to verify.

    Returns:
        Optional[str]: The user ID if the token is valid, None otherwise.
    """
    if not token or not isinstance(token, str):
        logger.warning("token_invalid_format", token_length=len(token) if token else 0)
        return None

    secret_key, algorithm = _jwt_config()
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_iat": True,
                "require_exp": True,
                "require_iat": True,
            },
        )
    except ExpiredSignatureError:
        logger.warning("token_expired", token_part=token[:20] + "...")
        return None
    except JWTError as e:
        logger.warning("token_invalid", error=str(e), token_part=token[:20] + "...")
        return None

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("token_missing_subject", payload_keys=list(payload.keys()))
        return None

    token_type = payload.get("type")
    if token_type and token_type != TOKEN_TYPE_ACCESS:
        logger.warning("token_invalid_type", token_type=token_type)
        return None

    logger.debug("token_verified", user_id=user_id, jti=payload.get("jti", "unknown"))
    return user_id
