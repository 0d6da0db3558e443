from fastapi import status
from fastapi.responses import RedirectResponse


def revalidate(path: str) -> RedirectResponse:
    """Send the browser back to a view after a write so it renders fresh data (POST/redirect/GET)."""
    response = RedirectResponse(url=path, status_code=status.HTTP_303_SEE_OTHER)
    response.headers["Cache-Control"] = "no-store"
    return response
