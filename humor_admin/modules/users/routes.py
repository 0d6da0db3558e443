from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from humor_admin.core.dependencies import AdminContext, admin_page_context, require_superadmin
from humor_admin.core.exceptions import BackendQueryError
from humor_admin.core.responses import revalidate
from humor_admin.core.templating import render
from humor_admin.modules.users.schemas import SuperadminToggle
from humor_admin.modules.users.service import ProfileService

router = APIRouter(prefix="/admin/users", tags=["users"])


@router.get("", response_class=HTMLResponse)
def list_users(
    request: Request,
    admin: AdminContext = Depends(admin_page_context),
):
    """Users & profiles page"""
    profiles, error = [], None
    try:
        profiles = ProfileService(admin.supabase).list_profiles()
    except BackendQueryError as e:
        error = e.message
    return render(request, "admin/users.html", {
        "admin": admin,
        "active": "users",
        "profiles": profiles,
        "error": error,
    })


@router.post("/toggle-superadmin")
def toggle_superadmin(
    profile_id: str = Form("", alias="profileId"),
    current_value: str = Form("false", alias="currentValue"),
    admin: AdminContext = Depends(require_superadmin),
):
    """Grant or revoke superadmin on one profile"""
    toggle = SuperadminToggle(profile_id=profile_id, current_value=current_value == "true")
    ProfileService(admin.supabase).toggle_superadmin(toggle)
    return revalidate("/admin/users")
