from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, Header, HTTPException, Request, status
from noticeboard.core.security import decode_access_token
from noticeboard.models.user import Role, User

async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> User:
    """
    FastAPI dependency to get the current authenticated account.

    The JWT is taken from:
    1. Authorization header (Bearer token) - preferred method
    2. HttpOnly cookie (accessToken) - fallback method

    Raises:
        HTTPException (401): AUTH_REQUIRED, AUTH_INVALID_TOKEN or AUTH_USER_NOT_FOUND
    """
    token = None
    # 1) Prioritize Authorization: Bearer xxx
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    # 2) Secondly HttpOnly Cookie: accessToken
    if not token:
        token = request.cookies.get("accessToken")

    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_REQUIRED")

    try:
        payload = decode_access_token(token)
        user_id = ObjectId(str(payload["sub"]))
    except Exception:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_INVALID_TOKEN")

    user = await User.get(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_USER_NOT_FOUND")
    return user

def require_roles(*roles: Role):
    """
    Build a dependency that only admits accounts with one of `roles`.

    Usage:
        @router.post("/notices")
        async def create(user: User = Depends(require_roles(Role.ADMIN, Role.FACULTY))):
            ...
    """
    async def _check(current: User = Depends(get_current_user)) -> User:
        if current.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="FORBIDDEN")
        return current
    return _check

require_admin = require_roles(Role.ADMIN)

def parse_object_id(raw: str) -> ObjectId | None:
    """ObjectId from a path parameter, or None when malformed."""
    if not raw:
        return None
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        return None

def get_database(request: Request):
    """The persistence handle created by the bootstrap (None when not wired)."""
    return getattr(request.app.state, "db", None)
