"""Client-side prompt template state."""

from lexora.client.api import ApiError, LexoraAPIClient
from lexora.client.notices import NoticeBoard
from lexora.domain.prompt import PromptTemplate


class PromptTemplateManager:
    """Cached template list plus the instruction currently in the editor."""

    def __init__(self, api: LexoraAPIClient, notices: NoticeBoard | None = None) -> None:
        self.api = api
        self.notices = notices or NoticeBoard()
        self.prompts: list[PromptTemplate] = []
        self.active_prompt = ""

    async def on_login(self) -> None:
        await self.fetch_prompts()

    def on_logout(self) -> None:
        self.prompts = []
        self.active_prompt = ""

    @property
    def defaults(self) -> list[PromptTemplate]:
        return [p for p in self.prompts if p.is_default]

    @property
    def custom(self) -> list[PromptTemplate]:
        return [p for p in self.prompts if not p.is_default]

    def select(self, prompt: PromptTemplate) -> None:
        self.active_prompt = prompt.prompt_text

    async def fetch_prompts(self) -> None:
        try:
            self.prompts = await self.api.list_prompts()
        except ApiError as e:
            self.notices.error(f"Failed to fetch prompts: {e.message}")
            return

        # First load: start from the first built-in template
        if not self.active_prompt and self.defaults:
            self.active_prompt = self.defaults[0].prompt_text

    async def save_prompt(self, title: str, prompt_text: str) -> bool:
        try:
            await self.api.create_prompt(title, prompt_text)
        except ApiError as e:
            self.notices.error(f"Failed to save prompt: {e.message}")
            return False
        await self.fetch_prompts()
        self.notices.success("Prompt template saved!")
        return True

    async def delete_prompt(self, prompt: PromptTemplate) -> bool:
        if prompt.is_default:
            self.notices.error("Default templates cannot be deleted.")
            return False
        try:
            await self.api.delete_prompt(prompt.id)
        except ApiError as e:
            self.notices.error(f"Failed to delete prompt: {e.message}")
            return False
        await self.fetch_prompts()
        self.notices.success("Prompt template deleted!")
        return True
