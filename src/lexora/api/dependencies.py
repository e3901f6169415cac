"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from lexora.domain.errors import NotAuthenticated
from lexora.infrastructure.database import get_session
from lexora.infrastructure.gmail_client import GmailClient, get_gmail_client
from lexora.infrastructure.llm_client import LLMClient, get_llm_client
from lexora.infrastructure.models import UserModel
from lexora.repositories.prompt_repo import PromptRepository
from lexora.repositories.summary_repo import SummaryRepository
from lexora.repositories.user_repo import UserRepository
from lexora.services.refiner import RefinementService
from lexora.services.sharing import EmailShareService
from lexora.services.summarizer import SummarizationService

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]
LLMDep = Annotated[LLMClient, Depends(get_llm_client)]
MailerDep = Annotated[GmailClient, Depends(get_gmail_client)]

# --- Session token authentication ---

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    session: SessionDep,
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> UserModel:
    """Resolve the bearer session token issued at OAuth login."""
    if credentials is None or not credentials.credentials:
        raise NotAuthenticated()
    user = await UserRepository(session).get_by_session_token(credentials.credentials)
    if user is None:
        raise NotAuthenticated()
    return user


CurrentUserDep = Annotated[UserModel, Depends(get_current_user)]


async def get_summary_repository(
    session: SessionDep,
) -> AsyncGenerator[SummaryRepository, None]:
    """Provide SummaryRepository instance."""
    yield SummaryRepository(session)


async def get_prompt_repository(
    session: SessionDep,
) -> AsyncGenerator[PromptRepository, None]:
    """Provide PromptRepository instance."""
    yield PromptRepository(session)


SummaryRepoDep = Annotated[SummaryRepository, Depends(get_summary_repository)]
PromptRepoDep = Annotated[PromptRepository, Depends(get_prompt_repository)]


def get_summarization_service(
    summary_repo: SummaryRepoDep,
    llm: LLMDep,
) -> SummarizationService:
    """Provide SummarizationService instance."""
    return SummarizationService(summary_repo, llm=llm)


def get_refinement_service(llm: LLMDep) -> RefinementService:
    """Provide RefinementService instance."""
    return RefinementService(llm=llm)


def get_email_share_service(session: SessionDep, mailer: MailerDep) -> EmailShareService:
    """Provide EmailShareService instance."""
    return EmailShareService(mailer=mailer, user_repo=UserRepository(session))


# Type aliases for commonly used dependencies
SummarizerDep = Annotated[SummarizationService, Depends(get_summarization_service)]
RefinerDep = Annotated[RefinementService, Depends(get_refinement_service)]
EmailShareDep = Annotated[EmailShareService, Depends(get_email_share_service)]
