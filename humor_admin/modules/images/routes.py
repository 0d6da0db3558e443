from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from humor_admin.core.dependencies import AdminContext, admin_page_context, require_superadmin
from humor_admin.core.exceptions import BackendQueryError
from humor_admin.core.responses import revalidate
from humor_admin.core.templating import render
from humor_admin.modules.images.service import ImageService

router = APIRouter(prefix="/admin/images", tags=["images"])


@router.get("", response_class=HTMLResponse)
def list_images(
    request: Request,
    admin: AdminContext = Depends(admin_page_context),
):
    images, error = [], None
    try:
        images = ImageService(admin.supabase).list_images(limit=request.app.state.settings.list_limit)
    except BackendQueryError as e:
        error = e.message
    return render(request, "admin/images.html", {
        "admin": admin,
        "active": "images",
        "images": images,
        "error": error,
    })


@router.post("/delete")
def delete_image(
    image_id: str = Form("", alias="imageId"),
    admin: AdminContext = Depends(require_superadmin),
):
    """Delete one image row; a missing id is a no-op"""
    ImageService(admin.supabase).delete_image(image_id)
    return revalidate("/admin/images")
