"""Transcript source variants."""

from dataclasses import dataclass

PLAIN_TEXT = "text/plain"
WORD_DOCUMENT = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SUPPORTED_MEDIA_TYPES = (PLAIN_TEXT, WORD_DOCUMENT)


@dataclass(frozen=True)
class PastedTranscript:
    """Transcript text pasted directly by the user."""

    text: str


@dataclass(frozen=True)
class UploadedTranscript:
    """Transcript file uploaded with its declared media type."""

    data: bytes
    media_type: str
    filename: str = "transcript"


TranscriptSource = PastedTranscript | UploadedTranscript
