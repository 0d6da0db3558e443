from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from humor_admin.core.dependencies import AdminContext, admin_page_context, require_superadmin
from humor_admin.core.exceptions import BackendQueryError
from humor_admin.core.responses import revalidate
from humor_admin.core.templating import render
from humor_admin.modules.captions.schemas import CaptionPageStats, CaptionVisibilityToggle
from humor_admin.modules.captions.service import CaptionService

router = APIRouter(prefix="/admin/captions", tags=["captions"])


@router.get("", response_class=HTMLResponse)
def list_captions(
    request: Request,
    admin: AdminContext = Depends(admin_page_context),
):
    """Captions page with visibility and delete controls"""
    captions, error = [], None
    try:
        captions = CaptionService(admin.supabase).list_captions(limit=request.app.state.settings.list_limit)
    except BackendQueryError as e:
        error = e.message
    return render(request, "admin/captions.html", {
        "admin": admin,
        "active": "captions",
        "captions": captions,
        "stats": CaptionPageStats.from_captions(captions),
        "error": error,
    })


@router.post("/toggle-public")
def toggle_caption_public(
    caption_id: str = Form("", alias="captionId"),
    current_public: str = Form("false", alias="currentPublic"),
    admin: AdminContext = Depends(require_superadmin),
):
    """Make a caption public or private"""
    toggle = CaptionVisibilityToggle(caption_id=caption_id, current_public=current_public == "true")
    CaptionService(admin.supabase).toggle_public(toggle)
    return revalidate("/admin/captions")


@router.post("/delete")
def delete_caption(
    caption_id: str = Form("", alias="captionId"),
    admin: AdminContext = Depends(require_superadmin),
):
    CaptionService(admin.supabase).delete_caption(caption_id)
    return revalidate("/admin/captions")
