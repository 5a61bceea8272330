import datetime as dt
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile, status
from noticeboard.api.deps import get_current_user, parse_object_id, require_roles
from noticeboard.models.notice import Audience, Notice
from noticeboard.models.user import Role, User
from noticeboard.services.attachments import AttachmentError, delete_attachment, save_upload

router = APIRouter(prefix="/notices", tags=["notices"])

TITLE_MAX = 200

# Audiences each role may read; admins read everything
VISIBLE_AUDIENCES = {
    Role.FACULTY: [Audience.ALL.value, Audience.FACULTY.value],
    Role.STUDENT: [Audience.ALL.value, Audience.STUDENT.value],
}

def _iso(ts: dt.datetime | None) -> str | None:
    if ts is None:
        return None
    if ts.tzinfo is None:
        return ts.isoformat() + "Z"
    return ts.astimezone(dt.timezone.utc).isoformat().replace("+00:00", "Z")

def _notice_out(n: Notice) -> dict:
    return {
        "id": str(n.id),
        "title": n.title,
        "content": n.content,
        "category": n.category,
        "audience": n.audience.value,
        "attachmentUrl": n.attachment_url,
        "attachmentName": n.attachment_name,
        "author": {"id": n.author_id, "username": n.author_username, "role": n.author_role},
        "createdAt": _iso(n.created_at),
        "updatedAt": _iso(n.updated_at),
    }

def _visible_to(n: Notice, user: User) -> bool:
    # Authors always see their own notices, whatever audience they target
    if n.author_id == str(user.id):
        return True
    allowed = VISIBLE_AUDIENCES.get(user.role)
    return allowed is None or n.audience.value in allowed

def _can_modify(n: Notice, user: User) -> bool:
    return user.role == Role.ADMIN or n.author_id == str(user.id)

def _clean_title(raw: str) -> str:
    title = (raw or "").strip()
    if not title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail={"code": "BAD_REQUEST", "message": "title required"})
    return title[:TITLE_MAX]

async def _store_file(request: Request, file: UploadFile) -> tuple[str, str]:
    settings = request.app.state.settings
    try:
        return await save_upload(file, settings.upload_dir, settings.max_upload_bytes)
    except AttachmentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail={"code": e.code, "message": e.message})

async def _get_visible_notice(nid: str, user: User) -> Notice:
    oid = parse_object_id(nid)
    n = await Notice.get(oid) if oid else None
    if not n or not _visible_to(n, user):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="NOT_FOUND")
    return n

@router.get("")
async def list_notices(
    user: User = Depends(get_current_user),
    category: str | None = Query(None),
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
):
    """
    Paginated list of notices visible to the caller, newest first.

    Students see audience "all" and "student", faculty see "all" and
    "faculty" plus their own posts, admins see every notice.
    """
    query: dict = {}
    allowed = VISIBLE_AUDIENCES.get(user.role)
    if allowed is not None:
        query["$or"] = [{"audience": {"$in": allowed}}, {"author_id": str(user.id)}]
    if category:
        query["category"] = category
    total = await Notice.find(query).count()
    rows = await Notice.find(query).sort(-Notice.created_at).skip(offset).limit(limit).to_list()
    return {"success": True, "data": {"items": [_notice_out(n) for n in rows],
                                      "offset": offset, "limit": limit, "total": total}}

@router.get("/{nid}")
async def get_notice(nid: str, user: User = Depends(get_current_user)):
    n = await _get_visible_notice(nid, user)
    return {"success": True, "data": _notice_out(n)}

@router.post("")
async def create_notice(
    request: Request,
    title: str = Form(...),
    content: str = Form(""),
    category: str = Form("general"),
    audience: Audience = Form(Audience.ALL),
    file: UploadFile | None = File(None),
    user: User = Depends(require_roles(Role.ADMIN, Role.FACULTY)),
):
    """
    Post a notice (admin or faculty), with an optional image/PDF attachment.
    """
    clean_title = _clean_title(title)
    attachment_url = attachment_name = None
    if file is not None and file.filename:
        attachment_url, attachment_name = await _store_file(request, file)
    n = Notice(
        title=clean_title,
        content=content or "",
        category=(category or "general").strip() or "general",
        audience=audience,
        attachment_url=attachment_url,
        attachment_name=attachment_name,
        author_id=str(user.id),
        author_username=user.username,
        author_role=user.role.value,
    )
    await n.insert()
    return {"success": True, "data": _notice_out(n)}

@router.put("/{nid}")
async def update_notice(
    nid: str,
    request: Request,
    title: str | None = Form(None),
    content: str | None = Form(None),
    category: str | None = Form(None),
    audience: Audience | None = Form(None),
    removeAttachment: bool = Form(False),
    file: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
):
    """
    Edit a notice (its author or an admin). Omitted fields are left unchanged.

    A new file replaces the current attachment; removeAttachment=true drops it.
    Replaced files are deleted from the upload directory.
    """
    n = await _get_visible_notice(nid, user)
    if not _can_modify(n, user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="FORBIDDEN")

    upload_dir = request.app.state.settings.upload_dir
    if title is not None:
        n.title = _clean_title(title)
    if content is not None:
        n.content = content
    if category is not None:
        n.category = category.strip() or "general"
    if audience is not None:
        n.audience = audience
    if file is not None and file.filename:
        url, name = await _store_file(request, file)
        delete_attachment(n.attachment_url, upload_dir)
        n.attachment_url, n.attachment_name = url, name
    elif removeAttachment:
        delete_attachment(n.attachment_url, upload_dir)
        n.attachment_url = n.attachment_name = None
    n.updated_at = dt.datetime.now(dt.timezone.utc)
    await n.save()
    return {"success": True, "data": _notice_out(n)}

@router.delete("/{nid}")
async def delete_notice(nid: str, request: Request, user: User = Depends(get_current_user)):
    """
    Delete a notice (its author or an admin) together with its attachment file.
    """
    n = await _get_visible_notice(nid, user)
    if not _can_modify(n, user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="FORBIDDEN")
    delete_attachment(n.attachment_url, request.app.state.settings.upload_dir)
    await n.delete()
    return {"success": True, "data": {"ok": True}}
