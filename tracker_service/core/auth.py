"""
Authentication module for Task Tracker Service.
Handles bearer token validation for protected routes.
"""
import logging
from typing import Optional, Dict, Any
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..utils.security import decode_token

# Configure logging
logger = logging.getLogger(__name__)

# Security scheme; missing headers are reported by get_current_user
security = HTTPBearer(
    scheme_name="Bearer Token",
    description="JWT Bearer token from /api/login or /admin/login",
    auto_error=False
)


class CurrentUser:
    """Represents the current authenticated caller."""

    def __init__(self, user_id: Optional[str], email: Optional[str], role: str = "user", **kwargs):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.extra_data = kwargs

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __str__(self):
        return f"User(id={self.user_id}, email={self.email}, role={self.role})"

    def __repr__(self):
        return self.__str__()

    def to_dict(self) -> Dict[str, Any]:
        return {"userId": self.user_id, "email": self.email, "role": self.role, **self.extra_data}

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "CurrentUser":
        """Create CurrentUser from decoded token claims."""
        return cls(
            user_id=claims.get("sub"),
            email=claims.get("email"),
            role=claims.get("role", "user"),
            **{k: v for k, v in claims.items() if k not in ["sub", "email", "role", "exp"]}
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """
    Dependency to get current authenticated user.

    Raises:
        HTTPException: 401 when no token is supplied, 403 when it is invalid
    """
    if not credentials or not credentials.credentials:
        logger.warning("No token provided in Authorization header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = decode_token(credentials.credentials)
    if claims is None:
        logger.warning("Token verification failed")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )

    current_user = CurrentUser.from_claims(claims)
    logger.debug(f"Authenticated caller: {current_user}")
    return current_user


async def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Dependency allowing only admin tokens."""
    if not current_user.is_admin:
        logger.warning(f"Unauthorized admin access attempt by: {current_user}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
