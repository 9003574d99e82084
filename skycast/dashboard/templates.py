import os
from typing import Any, Dict

from fastapi import Request, Response
from fastapi.templating import Jinja2Templates

from skycast.config import get_settings
from skycast.dashboard.formatting import (
    build_icon_url,
    capitalize_text,
    format_forecast_date,
    round_temperature,
    updated_label,
)

settings = get_settings()

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")

templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.filters["round_temp"] = round_temperature
templates.env.filters["capitalize_text"] = capitalize_text
templates.env.filters["icon_url"] = build_icon_url
templates.env.filters["forecast_date"] = format_forecast_date
templates.env.globals["updated_label"] = updated_label


def render(request: Request, template: str, context: Dict[str, Any]) -> Response:
    """Render a template with the app-wide context injected."""
    context["app_name"] = settings.app_name
    context["version"] = settings.app_version
    context["reload_seconds"] = settings.dashboard_reload_seconds
    context["refresh_minutes"] = settings.auto_refresh_interval // 60

    return templates.TemplateResponse(request, template, context)
