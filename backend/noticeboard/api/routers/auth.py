from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel
from noticeboard.core.security import verify_password, create_access_token, hash_password
from noticeboard.api.deps import get_current_user, require_admin
from noticeboard.models.user import Role, User

router = APIRouter(prefix="/auth", tags=["auth"])

class LoginRequest(BaseModel):
    username: str
    password: str
    role: Role | None = None  # the role picked on the login page, if any

class ChangePasswordIn(BaseModel):
    currentPassword: str
    newPassword: str

class CreateUserIn(BaseModel):
    username: str
    password: str
    role: Role = Role.STUDENT

def _user_out(user: User) -> dict:
    return {"id": str(user.id), "username": user.username, "role": user.role.value}

@router.post("/login")
async def login(payload: LoginRequest, response: Response):
    """
    Authenticate an account and issue an access token.

    The token is returned in the body and also set as an HttpOnly cookie
    named "accessToken" for the browser frontend.

    Raises:
        HTTPException (401): AUTH_INVALID_CREDENTIALS
        HTTPException (403): AUTH_ROLE_MISMATCH when `role` is given and differs
    """
    user = await User.find_one(User.username == payload.username)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail={"code": "AUTH_INVALID_CREDENTIALS", "message": "Incorrect username or password"})
    if payload.role is not None and payload.role != user.role:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail={"code": "AUTH_ROLE_MISMATCH", "message": f"Account is not a {payload.role.value} account"})
    token = create_access_token(str(user.id), user.role.value)
    response.set_cookie("accessToken", token, httponly=True, secure=False, samesite="lax")
    return {"success": True, "data": {"user": _user_out(user), "accessToken": token}}

@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return {"success": True, "data": _user_out(user)}

@router.post("/logout")
async def logout(response: Response):
    """
    Clear the access token cookie. The JWT itself stays valid until it expires.
    """
    response.delete_cookie("accessToken")
    return {"success": True}

@router.post("/change-password")
async def change_password(body: ChangePasswordIn, user: User = Depends(get_current_user)):
    if not verify_password(body.currentPassword, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail={"code": "AUTH_INVALID_CREDENTIALS", "message": "Current password is incorrect"})
    if not body.newPassword:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail={"code": "BAD_REQUEST", "message": "new password required"})
    user.password_hash = hash_password(body.newPassword)
    await user.save()
    return {"success": True, "data": {"ok": True}}

@router.get("/users")
async def list_users(
    role: Role | None = Query(None),
    admin: User = Depends(require_admin),
):
    """
    List accounts (admin only), optionally filtered by role.
    """
    query = User.find(User.role == role) if role else User.find_all()
    rows = await query.sort(+User.username).to_list()
    return {"success": True, "data": {"items": [_user_out(u) for u in rows], "total": len(rows)}}

@router.post("/users")
async def create_user(body: CreateUserIn, admin: User = Depends(require_admin)):
    """
    Create an account (admin only).

    Error codes (returned with success=False):
        - BAD_REQUEST: Missing username or password
        - USERNAME_EXISTS: Username already taken
    """
    username = (body.username or "").strip()
    if not username or not body.password:
        return {"success": False, "error": {"code": "BAD_REQUEST", "message": "username/password required"}}
    if await User.find_one(User.username == username):
        return {"success": False, "error": {"code": "USERNAME_EXISTS", "message": "Username already exists"}}
    u = User(username=username, password_hash=hash_password(body.password), role=body.role)
    await u.insert()
    return {"success": True, "data": _user_out(u)}
