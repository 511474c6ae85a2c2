"""
Authentication Dependency for FastAPI.

Tokens are issued by the user service (HS256, shared secret). The user id is
read from the "nameid" claim that service writes, falling back to "sub".

Config needed (from notification_service.config.settings):
- JWT_SECRET
- JWT_ISSUER
- JWT_AUDIENCE
"""

from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notification_service.config.settings import Config
from notification_service.domain.exceptions import DomainValidationError
from notification_service.domain.value_objects.user_id import UserId

USER_ID_CLAIMS = ("nameid", "sub")


@dataclass
class AuthUser:
    user_id: UserId


security = HTTPBearer()


def decode_token(token: str) -> AuthUser:
    """
    Validate a bearer token and resolve the caller.

    Raises:
        jwt.InvalidTokenError if the token is invalid, expired, or carries no usable user id
    """
    claims = jwt.decode(
        token,
        Config.JWT_SECRET,
        algorithms=["HS256"],
        audience=Config.JWT_AUDIENCE,
        issuer=Config.JWT_ISSUER,
        options={"require": ["exp", "aud", "iss"]},
    )

    raw_user_id = next(
        (claims[name] for name in USER_ID_CLAIMS if claims.get(name) is not None),
        None,
    )
    try:
        return AuthUser(user_id=UserId(int(raw_user_id)))
    except (TypeError, ValueError, DomainValidationError) as e:
        raise jwt.InvalidTokenError("Missing required user id claim in token") from e


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthUser:
    """
    Extract and validate user from JWT token.

    Raises:
        HTTPException 401 if token is invalid, expired, or missing required claims
    """
    try:
        return decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )
