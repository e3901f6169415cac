"""Error taxonomy shared by the API, the services and the client."""


class LexoraError(Exception):
    """Base error carrying an HTTP status and a user-facing message."""

    status_code: int = 500
    default_message: str = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInput(LexoraError):
    """A required field was absent or empty."""

    status_code = 400
    default_message = "Transcript and prompt are required."


class InvalidInput(LexoraError):
    """A field was present but not acceptable."""

    status_code = 400
    default_message = "Invalid input."


class UnsupportedFileType(LexoraError):
    """Uploaded media type is neither plain text nor a Word document."""

    status_code = 400
    default_message = "Unsupported file type."


class AIGenerationFailed(LexoraError):
    """The mandatory summary generation call failed."""

    status_code = 502
    default_message = "Failed to generate summary."


class TitleGenerationFailed(LexoraError):
    """The best-effort title call failed. Never surfaced to callers."""

    status_code = 502
    default_message = "Could not generate a title."


class RefinementFailed(LexoraError):
    """The refinement AI call failed."""

    status_code = 502
    default_message = "Failed to refine summary."


class NotFoundOrForbidden(LexoraError):
    """Record does not exist or is not owned by the caller."""

    status_code = 404
    default_message = "Summary not found or you do not have permission to edit it."


class DownstreamServiceFailure(LexoraError):
    """Email delivery or document parsing failed."""

    status_code = 502
    default_message = "A downstream service failed."


class NotAuthenticated(LexoraError):
    """No valid session token was presented."""

    status_code = 401
    default_message = "You must log in."
