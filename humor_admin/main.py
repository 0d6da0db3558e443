import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from humor_admin.config import LOGIN_PATH, Settings, get_settings
from humor_admin.core.exceptions import AccessDenied, LoginRedirect
from humor_admin.core.middleware import AuthGateMiddleware, SecurityHeadersMiddleware
from humor_admin.core.templating import render
from humor_admin.database.supabase_client import SupabaseClientFactory
from humor_admin.modules.auth import routes as auth_routes
from humor_admin.modules.captions import routes as captions_routes
from humor_admin.modules.dashboard import routes as dashboard_routes
from humor_admin.modules.images import routes as images_routes
from humor_admin.modules.users import routes as users_routes

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


async def health():
    return {"status": "healthy"}


async def ready():
    """Readiness probe: extend here with a Supabase ping if needed."""
    return {"status": "ready"}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.supabase_factory = SupabaseClientFactory(settings)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(LoginRedirect)
    async def login_redirect_handler(request: Request, exc: LoginRedirect):
        logger.info(f"Redirecting {request.url.path} to login ({exc.reason})")
        return RedirectResponse(url=LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(AccessDenied)
    async def access_denied_handler(request: Request, exc: AccessDenied):
        return render(request, "access_denied.html", {"email": exc.email}, status_code=403)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        detail = None if settings.is_production else str(exc)
        return render(request, "error.html", {"detail": detail}, status_code=500)

    # Added last runs first: security headers wrap the rate limiter, which wraps the auth gate
    app.add_middleware(AuthGateMiddleware)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(auth_routes.router)
    app.include_router(dashboard_routes.router)
    app.include_router(users_routes.router)
    app.include_router(captions_routes.router)
    app.include_router(images_routes.router)

    # Exemption is recorded by qualified name; the plain coroutines stay the endpoints
    limiter.exempt(health)
    limiter.exempt(ready)
    app.get("/health")(health)
    app.get("/ready")(ready)

    @app.on_event("startup")
    async def startup_event():
        logger.info("Application startup")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutdown")

    return app


def run() -> None:
    import uvicorn

    uvicorn.run("humor_admin.main:create_app", factory=True, host="0.0.0.0", port=8000)
