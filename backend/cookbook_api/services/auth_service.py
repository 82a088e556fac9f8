"""
Access tokens.

HS256 JWTs signed with settings.SECRET_KEY. The payload holds the user
id ("sub"), the expiry ("exp") and a "type" claim that must be
"access"; anything else is refused by verify_token.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from cookbook_api.core.config import settings
from cookbook_api.schemas.user import TokenPayload


ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def create_access_token(user_id: UUID) -> str:
    """
    Sign a token for `user_id`, valid for settings.JWT_EXPIRATION seconds.

    Example:
        headers = {"Authorization": f"Bearer {create_access_token(user.id)}"}
    """
    claims = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + timedelta(seconds=settings.JWT_EXPIRATION),
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> Optional[TokenPayload]:
    """
    Decode `token` and return its claims, or None.

    None covers a bad signature, an expired or malformed token, missing
    claims and a token of another type.
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None

    if claims.get("type") != expected_type or not claims.get("sub") or not claims.get("exp"):
        return None

    return TokenPayload(sub=claims["sub"], exp=claims["exp"], type=claims["type"])
