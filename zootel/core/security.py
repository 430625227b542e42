from datetime import datetime, timedelta
from typing import Iterable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from zootel.core.config import settings
from zootel.schemas.schemas import Principal

ROLE_SUPERADMIN = "superadmin"
ROLE_PET_COMPANY = "pet_company"
ROLE_PET_OWNER = "pet_owner"
VALID_ROLES = (ROLE_SUPERADMIN, ROLE_PET_COMPANY, ROLE_PET_OWNER)

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    """Create a JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Principal:
    """Decode a bearer token into the authenticated principal"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception

    uid: str = payload.get("sub")
    if not uid:
        raise credentials_exception

    role = payload.get("role") or ROLE_PET_OWNER
    if role not in VALID_ROLES:
        raise credentials_exception

    return Principal(uid=uid, email=payload.get("email"), role=role)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """Get the authenticated principal from the Authorization header"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_access_token(credentials.credentials)


def require_role(roles: Iterable[str]):
    """
    Build a dependency that only lets principals with one of ``roles`` through.

    Usage:
        current: Principal = Depends(require_role([ROLE_PET_COMPANY, ROLE_SUPERADMIN]))
    """
    allowed = tuple(roles)

    async def role_checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {', '.join(allowed)}",
            )
        return principal

    return role_checker


require_company = require_role([ROLE_PET_COMPANY, ROLE_SUPERADMIN])
require_pet_owner = require_role([ROLE_PET_OWNER])
require_superadmin = require_role([ROLE_SUPERADMIN])
