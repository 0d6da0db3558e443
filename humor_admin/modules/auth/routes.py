from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from humor_admin.config import ADMIN_PATH, LOGIN_PATH
from humor_admin.core.templating import render
from humor_admin.database.supabase_client import get_supabase
from humor_admin.modules.auth.service import AuthService
from supabase import Client
from typing import Optional

router = APIRouter(tags=["auth"])


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def _callback_url(request: Request) -> str:
    site_url = request.app.state.settings.site_url or str(request.base_url)
    return site_url.rstrip("/") + "/auth/callback"


@router.get(LOGIN_PATH, response_class=HTMLResponse)
async def login_page(request: Request):
    """Admin login page; signed-in users are sent to the dashboard by the auth gate"""
    return render(request, "login.html")


@router.post(LOGIN_PATH)
def start_login(
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    """Start the OAuth flow with the configured provider"""
    provider = request.app.state.settings.oauth_provider
    url = service.start_oauth(provider, _callback_url(request))
    return _redirect(url)


@router.get("/auth/callback")
def oauth_callback(
    code: Optional[str] = None,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange the provider's authorization code for a cookie session"""
    if not code:
        return _redirect(LOGIN_PATH)
    if not service.exchange_code(code):
        return _redirect(LOGIN_PATH)
    return _redirect(ADMIN_PATH)


@router.post("/auth/signout")
def sign_out(
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    service.sign_out()
    storage = getattr(request.state, "session_storage", None)
    if storage is not None:
        storage.clear()
    return _redirect(LOGIN_PATH)
