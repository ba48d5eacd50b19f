from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cashflow.config import settings
from cashflow.exceptions import UnauthorizedError

_bearer = HTTPBearer(auto_error=False)


async def verify_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> dict:
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    try:
        return jwt.decode(credentials.credentials, settings.jwt_secret, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired") from None
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token") from None


async def get_current_user_id(claims: Annotated[dict, Depends(verify_token)]) -> str:
    subject = claims.get("sub")
    if not subject:
        raise UnauthorizedError("User ID not found in token")
    return str(subject)
