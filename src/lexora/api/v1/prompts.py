"""Prompt template API endpoints."""

from fastapi import APIRouter

from lexora.api.dependencies import CurrentUserDep, PromptRepoDep
from lexora.api.v1.schemas import MessageResponse, PromptCreateRequest, PromptResponse
from lexora.domain.errors import InvalidInput, MissingInput
from lexora.domain.prompt import MAX_PROMPT_TITLE_LENGTH

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("", response_model=list[PromptResponse])
async def list_prompts(
    user: CurrentUserDep,
    prompt_repo: PromptRepoDep,
) -> list[PromptResponse]:
    """List default templates followed by the caller's own."""
    prompts = await prompt_repo.list_visible(user.id)
    return [PromptResponse.model_validate(p) for p in prompts]


@router.post("", response_model=PromptResponse, status_code=201)
async def create_prompt(
    request: PromptCreateRequest,
    user: CurrentUserDep,
    prompt_repo: PromptRepoDep,
) -> PromptResponse:
    """Save a custom template."""
    if not request.title.strip() or not request.prompt_text.strip():
        raise MissingInput("Title and prompt text are required.")
    if len(request.title.strip()) > MAX_PROMPT_TITLE_LENGTH:
        raise InvalidInput(f"Title must be at most {MAX_PROMPT_TITLE_LENGTH} characters.")
    prompt = await prompt_repo.create(user.id, request.title.strip(), request.prompt_text)
    return PromptResponse.model_validate(prompt)


@router.delete("/{prompt_id}", response_model=MessageResponse)
async def delete_prompt(
    prompt_id: int,
    user: CurrentUserDep,
    prompt_repo: PromptRepoDep,
) -> MessageResponse:
    """Delete one of the caller's custom templates."""
    await prompt_repo.delete(prompt_id, user.id)
    return MessageResponse(message="Prompt deleted.")
