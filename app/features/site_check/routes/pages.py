from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.features.site_check.utils.score_band import FAIR_SCORE, GOOD_SCORE
from app.platform.config import settings

template_dir = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(template_dir))

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.APP_NAME,
            "check_endpoint": "/api/check",
            "good_score": GOOD_SCORE,
            "fair_score": FAIR_SCORE,
        },
    )
