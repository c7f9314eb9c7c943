"""Authentication constants."""

ACCESS_TOKEN_EXPIRE_DAYS_DEFAULT = 7
JWT_ALGORITHM_DEFAULT = "HS256"
TOKEN_TYPE_ACCESS = "access_token"
TOKEN_TYPE_BEARER = "bearer"

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
