"""Transcript extraction from pasted text or uploaded files."""

import io
import logging

import docx

from lexora.domain.errors import DownstreamServiceFailure, MissingInput, UnsupportedFileType
from lexora.domain.transcript import (
    PLAIN_TEXT,
    WORD_DOCUMENT,
    PastedTranscript,
    TranscriptSource,
    UploadedTranscript,
)

logger = logging.getLogger(__name__)


def _read_word_document(data: bytes) -> str:
    """Extract raw paragraph text from a .docx payload."""
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as e:
        logger.error(f"Failed to parse Word document: {e}")
        raise DownstreamServiceFailure("Could not read the uploaded document.") from e
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def _base_media_type(media_type: str) -> str:
    """Drop parameters such as ``; charset=utf-8``."""
    return media_type.split(";", 1)[0].strip().lower()


def extract_text(source: TranscriptSource | None) -> str:
    """Return the plain-text transcript for a source.

    Raises:
        UnsupportedFileType: upload is neither plain text nor a Word document
        MissingInput: nothing was supplied, or the result is empty
        DownstreamServiceFailure: the document parser failed
    """
    if isinstance(source, UploadedTranscript):
        media_type = _base_media_type(source.media_type)
        if media_type == PLAIN_TEXT:
            # Undecodable bytes become U+FFFD rather than failing the upload
            text = source.data.decode("utf-8", errors="replace")
        elif media_type == WORD_DOCUMENT:
            text = _read_word_document(source.data)
        else:
            logger.info(f"Rejected upload {source.filename!r} with type {media_type!r}")
            raise UnsupportedFileType()
    elif isinstance(source, PastedTranscript):
        text = source.text
    else:
        text = ""

    if not text or not text.strip():
        raise MissingInput()
    return text
