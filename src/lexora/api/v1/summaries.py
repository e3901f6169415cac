"""Summary API endpoints."""

import logging

from fastapi import APIRouter, File, Form, UploadFile

from lexora.api.dependencies import CurrentUserDep, RefinerDep, SummarizerDep, SummaryRepoDep
from lexora.api.v1.schemas import (
    RefineRequest,
    RefineResponse,
    RenameRequest,
    SaveTextRequest,
    SummaryResponse,
)
from lexora.domain.errors import InvalidInput, MissingInput, NotFoundOrForbidden
from lexora.domain.summary import MAX_TITLE_LENGTH
from lexora.domain.transcript import PastedTranscript, TranscriptSource, UploadedTranscript
from lexora.services.extractor import extract_text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summaries"])


@router.get("/summaries", response_model=list[SummaryResponse])
async def list_summaries(
    user: CurrentUserDep,
    summary_repo: SummaryRepoDep,
) -> list[SummaryResponse]:
    """List the caller's summaries, newest first."""
    summaries = await summary_repo.list_by_owner(user.id)
    return [SummaryResponse.model_validate(s) for s in summaries]


@router.get("/summaries/{share_id}", response_model=SummaryResponse)
async def get_shared_summary(
    share_id: str,
    summary_repo: SummaryRepoDep,
) -> SummaryResponse:
    """Public read of one summary by share id. No authentication."""
    summary = await summary_repo.get_by_share_id(share_id)
    if not summary:
        raise NotFoundOrForbidden("Summary not found.")
    return SummaryResponse.model_validate(summary)


@router.post("/summarize", response_model=SummaryResponse)
async def summarize(
    user: CurrentUserDep,
    summarizer: SummarizerDep,
    prompt: str = Form(""),
    transcript: str = Form(""),
    file: UploadFile | None = File(None),
) -> SummaryResponse:
    """Summarize an uploaded file or pasted transcript and store the result."""
    source: TranscriptSource
    if file is not None and file.filename:
        source = UploadedTranscript(
            data=await file.read(),
            media_type=file.content_type or "",
            filename=file.filename,
        )
    else:
        source = PastedTranscript(text=transcript)

    # Unsupported uploads fail here, before any AI call
    original_content = extract_text(source)

    summary = await summarizer.summarize(original_content, prompt, owner_id=user.id)
    return SummaryResponse.model_validate(summary)


@router.post("/summaries/refine", response_model=RefineResponse)
async def refine_summary(
    request: RefineRequest,
    _user: CurrentUserDep,
    refiner: RefinerDep,
) -> RefineResponse:
    """Revise summary text without persisting it."""
    refined = await refiner.refine(request.current_summary, request.refinement_prompt)
    return RefineResponse(refined_text=refined)


@router.patch("/summaries/{summary_id}", response_model=SummaryResponse)
async def rename_summary(
    summary_id: int,
    request: RenameRequest,
    user: CurrentUserDep,
    summary_repo: SummaryRepoDep,
) -> SummaryResponse:
    """Rename a summary the caller owns."""
    title = request.title.strip()
    if not title:
        raise MissingInput("Title is required.")
    if len(title) > MAX_TITLE_LENGTH:
        raise InvalidInput(f"Title must be at most {MAX_TITLE_LENGTH} characters.")
    summary = await summary_repo.rename(summary_id, user.id, title)
    return SummaryResponse.model_validate(summary)


@router.patch("/summaries/{summary_id}/text", response_model=SummaryResponse)
async def save_summary_text(
    summary_id: int,
    request: SaveTextRequest,
    user: CurrentUserDep,
    summary_repo: SummaryRepoDep,
) -> SummaryResponse:
    """Persist refined text for a summary the caller owns."""
    if not request.summary_text.strip():
        raise MissingInput("Summary text is required.")
    summary = await summary_repo.save_refined_text(summary_id, user.id, request.summary_text)
    return SummaryResponse.model_validate(summary)
