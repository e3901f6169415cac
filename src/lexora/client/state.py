"""Client-side summary state: active summary, history and UI flags."""

import logging
from dataclasses import dataclass

from lexora.client.api import ApiError, LexoraAPIClient
from lexora.client.export import ExportArtifact, ExportFormat, export_summary
from lexora.client.notices import NoticeBoard
from lexora.client.optimistic import OptimisticValues, RequestSequencer, optimistic_update
from lexora.client.refinement import RefinementChain
from lexora.domain.summary import Summary, build_share_url
from lexora.domain.transcript import TranscriptSource

logger = logging.getLogger(__name__)

HISTORY_KEY = "history"


@dataclass
class SummaryViewState:
    """Everything the summary screens render from."""

    summary: Summary | None = None
    history: tuple[Summary, ...] = ()
    is_loading: bool = False
    is_history_loading: bool = False
    is_refining: bool = False
    show_history: bool = True
    recipient: str = ""
    search_term: str = ""


class SummaryStateManager:
    """Owns the client's summary state and the calls that change it.

    The API client and notice board are injected; nothing is looked up
    from ambient globals.
    """

    def __init__(self, api: LexoraAPIClient, notices: NoticeBoard | None = None) -> None:
        self.api = api
        self.notices = notices or NoticeBoard()
        self.state = SummaryViewState()
        self.chain: RefinementChain | None = None
        self._sequencer = RequestSequencer()
        self._titles: OptimisticValues[int, str] = OptimisticValues()

    # --- Session ---

    async def on_login(self) -> None:
        await self.fetch_history()

    def on_logout(self) -> None:
        # Invalidate any in-flight history fetch
        self._sequencer.begin(HISTORY_KEY)
        self._titles.clear()
        self.state = SummaryViewState()
        self.chain = None

    # --- History ---

    async def fetch_history(self) -> None:
        ticket = self._sequencer.begin(HISTORY_KEY)
        self.state.is_history_loading = True
        try:
            history = await self.api.list_summaries()
        except ApiError as e:
            if self._sequencer.is_latest(HISTORY_KEY, ticket):
                self.notices.error(f"Failed to fetch history: {e.message}")
            return
        finally:
            if self._sequencer.is_latest(HISTORY_KEY, ticket):
                self.state.is_history_loading = False

        if self._sequencer.is_latest(HISTORY_KEY, ticket):
            for summary in history:
                self._titles.confirm(summary.id, summary.title, ticket)
            # Renames still in flight stay visible over the refreshed list
            self.state.history = tuple(self._retitled(s) for s in history)
        else:
            logger.debug("Discarded stale history response")

    @property
    def filtered_history(self) -> list[Summary]:
        """History entries matching the search term, case-insensitively."""
        term = self.state.search_term.strip()
        if not term:
            return list(self.state.history)
        return [s for s in self.state.history if s.matches(term)]

    def set_search_term(self, term: str) -> None:
        self.state.search_term = term

    # --- Active summary ---

    def _activate(self, summary: Summary) -> None:
        self.state.summary = summary
        self.chain = RefinementChain(original_text=summary.summary_text)
        self.state.show_history = False

    def select_from_history(self, summary: Summary) -> None:
        self._activate(summary)

    async def generate_summary(self, source: TranscriptSource, prompt: str) -> Summary | None:
        self.state.is_loading = True
        try:
            summary = await self.api.summarize(source, prompt)
        except ApiError as e:
            self.notices.error(f"Error: {e.message}")
            return None
        finally:
            self.state.is_loading = False

        self._activate(summary)
        await self.fetch_history()
        self.notices.success("Summary generated successfully!")
        return summary

    # --- Mutations ---

    async def rename_summary(self, summary_id: int, new_title: str) -> bool:
        """Rename optimistically.

        Only the renamed entry is touched. While renames of it are in
        flight it shows the newest requested title; once none are, it
        shows the last title the server accepted.
        """
        ticket = self._sequencer.begin(f"rename:{summary_id}")
        shown = self._shown_title(summary_id)
        if shown is not None and not self._titles.is_pending(summary_id):
            self._titles.confirm(summary_id, shown, 0)

        def apply() -> None:
            self._titles.start(summary_id, new_title, ticket)
            self._refresh_title(summary_id)

        def settle(accepted: bool) -> None:
            self._titles.finish(summary_id, ticket, accepted, self._sequencer.next_ticket())
            self._refresh_title(summary_id)

        try:
            await optimistic_update(
                apply,
                commit=lambda: self.api.rename_summary(summary_id, new_title),
                settle=settle,
            )
        except ApiError as e:
            self.notices.error(f"Failed to rename summary: {e.message}")
            return False

        self.notices.success("Summary renamed!")
        return True

    def _shown_title(self, summary_id: int) -> str | None:
        for summary in self.state.history:
            if summary.id == summary_id:
                return summary.title
        active = self.state.summary
        if active is not None and active.id == summary_id:
            return active.title
        return None

    def _retitled(self, summary: Summary) -> Summary:
        title = self._titles.visible(summary.id, summary.title)
        return summary if title == summary.title else summary.with_title(title)

    def _refresh_title(self, summary_id: int) -> None:
        self.state.history = tuple(
            self._retitled(s) if s.id == summary_id else s for s in self.state.history
        )
        active = self.state.summary
        if active is not None and active.id == summary_id:
            self.state.summary = self._retitled(active)

    async def refine(self, instruction: str) -> str | None:
        """Run one refinement turn on the active chain. Nothing is saved."""
        if self.chain is None or not instruction.strip() or self.state.is_refining:
            return None

        self.state.is_refining = True
        try:
            refined = await self.api.refine_summary(self.chain.current_text, instruction)
        except ApiError as e:
            self.notices.error(f"Failed to refine summary: {e.message}")
            return None
        finally:
            self.state.is_refining = False

        self.chain.record(instruction, refined)
        return refined

    def undo_refinement(self) -> bool:
        if self.chain is None:
            return False
        return self.chain.undo()

    @property
    def current_text(self) -> str:
        if self.chain is not None:
            return self.chain.current_text
        return self.state.summary.summary_text if self.state.summary else ""

    async def save_changes(self) -> bool:
        """Persist the current text.

        The local text stays even if the save fails, so it can be retried.
        """
        summary = self.state.summary
        if summary is None:
            return False

        text = self.current_text
        self.state.summary = summary.with_text(text)
        try:
            await self.api.save_summary_text(summary.id, text)
        except ApiError as e:
            self.notices.error(f"Failed to save changes: {e.message}")
            return False

        if self.chain is not None:
            self.chain.mark_saved()
        await self.fetch_history()
        self.notices.success("Changes saved!")
        return True

    # --- Sharing and export ---

    def share_link(self, origin: str) -> str | None:
        summary = self.state.summary
        if summary is None or not summary.share_id:
            return None
        return build_share_url(origin, summary.share_id)

    async def share_by_email(self) -> bool:
        text = self.current_text
        recipient = self.state.recipient.strip()
        if not text or not recipient:
            self.notices.error("Please provide a recipient email.")
            return False

        try:
            await self.api.share_by_email(text, recipient)
        except ApiError as e:
            self.notices.error(f"Error: Could not send email. {e.message}")
            return False

        self.state.recipient = ""
        self.notices.success("Email sent successfully!")
        return True

    def export(self, export_format: ExportFormat) -> ExportArtifact | None:
        summary = self.state.summary
        if summary is None:
            self.notices.error("No summary to export.")
            return None

        artifact = export_summary(summary.title, self.current_text, export_format)
        self.notices.success(f"{artifact.filename} ready to download!")
        return artifact
