from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from humor_admin.core.dependencies import AdminContext, admin_page_context
from humor_admin.core.templating import render
from humor_admin.modules.dashboard.service import DashboardService

router = APIRouter(prefix="/admin", tags=["dashboard"])


@router.get("", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    admin: AdminContext = Depends(admin_page_context),
):
    """Overview of the humor database at a glance"""
    settings = request.app.state.settings
    service = DashboardService(
        admin.supabase,
        top_captions_limit=settings.top_captions_limit,
        recent_votes_limit=settings.recent_votes_limit,
    )
    stats = await service.load_stats()
    return render(request, "admin/dashboard.html", {
        "admin": admin,
        "active": "dashboard",
        "stats": stats,
    })
