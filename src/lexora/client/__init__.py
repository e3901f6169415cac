"""Python client for Lexora: REST calls plus the state the UI renders from."""

from lexora.client.api import ApiError, LexoraAPIClient
from lexora.client.export import ExportArtifact, ExportFormat, export_summary
from lexora.client.notices import Notice, NoticeBoard, NoticeLevel
from lexora.client.prompts import PromptTemplateManager
from lexora.client.refinement import RefinementChain, RefinementTurn
from lexora.client.state import SummaryStateManager, SummaryViewState

__all__ = [
    "ApiError",
    "ExportArtifact",
    "ExportFormat",
    "LexoraAPIClient",
    "Notice",
    "NoticeBoard",
    "NoticeLevel",
    "PromptTemplateManager",
    "RefinementChain",
    "RefinementTurn",
    "SummaryStateManager",
    "SummaryViewState",
    "export_summary",
]
