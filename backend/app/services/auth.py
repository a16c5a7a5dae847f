"""
Bearer-token guard for the CV endpoints.

Accounts live elsewhere; this only checks a signed JWT carrying
{id, email, role} and exposes it as a lightweight user object.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import get_settings

CANDIDATE_ROLE = "candidate"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24

# auto_error off so a missing token is a 401 with our own detail
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
):
    """
    Dependency to validate the JWT from the Authorization header.
    Returns a user object with `.id`, `.email` and `.role`.
    """
    token = credentials.credentials.strip() if credentials else ""
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing authentication token")

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user_id = payload.get("id") or payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")

    return SimpleNamespace(id=str(user_id), email=payload.get("email"), role=payload.get("role"))


async def require_candidate(current_user=Depends(get_current_user)):
    """Only candidates may upload a CV."""
    if getattr(current_user, "role", None) != CANDIDATE_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Candidate role required.",
        )
    return current_user
