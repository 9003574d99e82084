"""
This module defines the dashboard page routes.
"""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from starlette.status import HTTP_303_SEE_OTHER

from skycast.dashboard.controller import DashboardController
from skycast.dashboard.templates import render
from skycast.utils.dependencies import get_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    dashboard: DashboardController = Depends(get_dashboard),
) -> Response:
    return render(request, "dashboard.html", {"state": dashboard.state})


@router.post("/search")
async def search(
    city: str = Form(""),
    dashboard: DashboardController = Depends(get_dashboard),
) -> Response:
    """Run a manual search, then send the browser back to the page."""
    await dashboard.search(city)
    return RedirectResponse(url="/", status_code=HTTP_303_SEE_OTHER)
