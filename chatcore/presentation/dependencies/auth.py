"""
Authentication Dependency for FastAPI.

- Reads an optional Bearer JWT from the Authorization header
- No header → anonymous caller (None); queries then return empty results and
  commands fail with 401 in the application layer
- Invalid or expired token → HTTPException 401
- The caller's identity is "<iss>|<sub>" (TokenIdentifier)

Config needed (from chatcore.config.settings):
- SERVICE_AUTH_SECRET
- SERVICE_AUTH_ISSUER
- SERVICE_AUTH_AUDIENCE
"""

import jwt
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.config.settings import Config


security = HTTPBearer(auto_error=False)


async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenIdentifier]:
    """
    Extract and validate the caller's token identifier.

    Raises:
        HTTPException 401 if a token is present but invalid, expired, or
        missing required claims
    """
    if credentials is None:
        return None

    try:
        claims = jwt.decode(
            credentials.credentials,
            Config.SERVICE_AUTH_SECRET,
            algorithms=["HS256"],
            audience=Config.SERVICE_AUTH_AUDIENCE,
            issuer=Config.SERVICE_AUTH_ISSUER,
            options={"require": ["exp", "iat", "aud", "iss", "sub"]},
        )
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

    subject = claims.get("sub")
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing required claims in token",
        )

    return TokenIdentifier.from_claims(claims["iss"], subject)
