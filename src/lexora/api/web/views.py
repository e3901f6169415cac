"""Server-rendered public share page."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from lexora.api.dependencies import SummaryRepoDep
from lexora.config import get_settings
from lexora.domain.summary import build_share_url

router = APIRouter(tags=["web"])
settings = get_settings()

# Templates configuration
templates = Jinja2Templates(directory="templates")


@router.get("/summary/{share_id}", response_class=HTMLResponse)
async def shared_summary(
    request: Request,
    share_id: str,
    summary_repo: SummaryRepoDep,
) -> HTMLResponse:
    """Render a shared summary for anyone holding the link."""
    summary = await summary_repo.get_by_share_id(share_id)
    if summary is None:
        return templates.TemplateResponse(
            request=request,
            name="summary_not_found.html",
            context={},
            status_code=404,
        )

    return templates.TemplateResponse(
        request=request,
        name="shared_summary.html",
        context={
            "summary": summary,
            "share_url": build_share_url(settings.public_base_url, summary.share_id),
        },
    )
