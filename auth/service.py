from datetime import datetime, timedelta

from fastapi import Depends, HTTPException, Header
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, ExpiredSignatureError, jwt
from passlib.context import CryptContext

from config import get_settings

# =========================
# JWT / SECURITY CONFIG
# =========================

ALGORITHM = "HS256"

# Roles allowed through the admin gate
ADMIN_ROLES = ("admin", "super_admin")

# OAuth2 bearer token (standard FastAPI pattern)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

# Password hashing setup
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


# =========================
# PASSWORD HELPERS
# =========================

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


# =========================
# TOKEN CREATION
# =========================

def create_access_token(data: dict, expires_minutes: int = None) -> str:
    """Create a JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    expire = datetime.utcnow() + timedelta(minutes=minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=401,
            detail="Token expired"
        )
    except JWTError:
        raise HTTPException(
            status_code=401,
            detail="Invalid token"
        )


# =========================
# TOKEN VERIFICATION (HEADER OR QUERY)
# =========================

def verify_token(
    authorization: str = Header(None),
    token: str = None
):
    """
    Verify JWT token from Authorization header (Bearer <token>)
    or from a 'token' query parameter (e.g. opening a PDF in a new tab).
    Returns the decoded payload if valid.
    """
    if authorization:
        try:
            scheme, token_value = authorization.split()
        except ValueError:
            raise HTTPException(
                status_code=401,
                detail="Invalid authorization header format"
            )
        if scheme.lower() != "bearer":
            raise HTTPException(
                status_code=401,
                detail="Invalid authorization scheme"
            )
        token = token_value
    elif not token:
        raise HTTPException(
            status_code=401,
            detail="Missing authorization token"
        )

    return decode_access_token(token)


# =========================
# STANDARD BEARER TOKEN FLOW
# =========================

def get_current_user_from_bearer(
    token: str = Depends(oauth2_scheme)
) -> dict:
    """
    Get current user payload from standard Bearer token (Authorization header).
    Use this in typical protected routes.
    """
    return decode_access_token(token)


def ensure_admin(user: dict) -> dict:
    if user.get("role") not in ADMIN_ROLES:
        raise HTTPException(
            status_code=403,
            detail="Admin access required"
        )
    return user


def require_admin(user: dict = Depends(get_current_user_from_bearer)) -> dict:
    """
    Dependency for admin-only routes.
    Example:
        @router.get("/admin/things")
        def list_things(user = Depends(require_admin)):
            ...
    """
    return ensure_admin(user)


def require_admin_download(user: dict = Depends(verify_token)) -> dict:
    """Admin gate that also accepts ?token= for browser downloads."""
    return ensure_admin(user)
