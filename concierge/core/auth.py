"""
Authentication utilities for bearer JWT verification.

Concierge does not issue credentials. The dashboard signs users in against an
external identity provider and sends the resulting JWT in the Authorization
header. This module verifies the JWT and extracts user info.
"""
import logging
from typing import Optional

import requests
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from concierge.core.config import settings

logger = logging.getLogger(__name__)

# Security scheme for Bearer token
security = HTTPBearer()

# user_role claim values: admin, property_manager, facility_manager, resident, security, case_manager
# roles allowed to change leasing data (sites, spaces, residents, leases, funders)
PROPERTY_ROLES = ("admin", "property_manager")
# roles allowed to run service / work orders
FACILITY_ROLES = ("admin", "property_manager", "facility_manager")


class User:
    """User model extracted from JWT token."""
    def __init__(self, user_id: str, email: Optional[str], role: Optional[str] = None):
        self.id = user_id
        self.email = email
        self.role = role or "resident"  # least-privileged default


# Cache for JWKS keys (to avoid fetching on every request)
_jwks_cache = None


def get_jwks():
    """
    Fetch the identity provider's JSON Web Key Set.

    Returns:
        dict: JWKS containing public keys for token verification
    """
    global _jwks_cache

    if _jwks_cache is not None:
        return _jwks_cache

    if not settings.AUTH_JWKS_URL:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token verification is not configured",
        )

    try:
        response = requests.get(settings.AUTH_JWKS_URL, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        return _jwks_cache
    except requests.RequestException as e:
        logger.error("Failed to fetch JWKS from %s: %s", settings.AUTH_JWKS_URL, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch signing keys",
        )


def verify_token(token: str) -> dict:
    """
    Verify a JWT and return the decoded payload.

    A configured AUTH_JWT_SECRET means the provider signs with HS256;
    otherwise the token is checked against the provider's JWKS (ES256/RS256).

    Raises:
        HTTPException: If token is invalid or expired
    """
    if settings.AUTH_JWT_SECRET:
        key = settings.AUTH_JWT_SECRET
        algorithms = ["HS256"]
    else:
        key = get_jwks()
        algorithms = ["ES256", "RS256"]

    try:
        return jwt.decode(
            token,
            key,
            algorithms=algorithms,
            audience=settings.AUTH_AUDIENCE,
            options={"verify_aud": True},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid authentication credentials: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    """
    FastAPI dependency to get the current authenticated user from the JWT.

    Usage in route:
        @router.get("/protected")
        def protected_route(current_user: User = Depends(get_current_user)):
            return {"user_id": current_user.id}
    """
    payload = verify_token(credentials.credentials)

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return User(user_id=user_id, email=payload.get("email"), role=payload.get("role"))


def require_role(*allowed_roles: str):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.post("/leases")
        def create_lease(
            current_user: User = Depends(require_role("admin", "property_manager"))
        ):
            ...
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required role: {' or '.join(allowed_roles)}",
            )
        return current_user
    return role_checker
