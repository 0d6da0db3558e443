from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

_template_dir = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(_template_dir))


def format_datetime(value: Optional[datetime], with_time: bool = True) -> str:
    if value is None:
        return "N/A"
    return value.strftime("%Y-%m-%d %H:%M" if with_time else "%Y-%m-%d")


templates.env.filters["datetime"] = format_datetime


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    page_context = {"settings": request.app.state.settings}
    page_context.update(context or {})
    response = templates.TemplateResponse(
        request=request,
        name=name,
        context=page_context,
        status_code=status_code,
    )
    response.headers["Cache-Control"] = "no-store"
    return response
