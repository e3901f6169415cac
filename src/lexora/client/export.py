"""Export of summary text as text, Markdown or a rendered PDF."""

import re
from dataclasses import dataclass
from enum import Enum

from fpdf import FPDF
from PIL import Image, ImageDraw, ImageFont


class ExportFormat(str, Enum):
    TEXT = "txt"
    MARKDOWN = "md"
    PDF = "pdf"


MEDIA_TYPES = {
    ExportFormat.TEXT: "text/plain",
    ExportFormat.MARKDOWN: "text/markdown",
    ExportFormat.PDF: "application/pdf",
}

# Rendering of the summary view, in CSS pixels before scaling
VIEW_WIDTH = 720
VIEW_PADDING = 20
FONT_SIZE = 14
LINE_SPACING = 1.5
TEXT_COLOR = "#333333"
BACKGROUND_COLOR = "#ffffff"


@dataclass(frozen=True)
class ExportArtifact:
    """A downloadable file produced from a summary."""

    filename: str
    media_type: str
    content: bytes


def export_filename(title: str, export_format: ExportFormat) -> str:
    """``Weekly Sync!`` becomes ``weekly_sync_.md``."""
    stem = re.sub(r"[^a-z0-9]", "_", title, flags=re.IGNORECASE).lower()
    return f"{stem or 'summary'}.{export_format.value}"


def _wrap(
    text: str,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    max_width: float,
    draw: ImageDraw.ImageDraw,
) -> list[str]:
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        words = paragraph.split(" ")
        line = ""
        for word in words:
            candidate = f"{line} {word}" if line else word
            if line and draw.textlength(candidate, font=font) > max_width:
                lines.append(line)
                line = word
            else:
                line = candidate
        lines.append(line)
    return lines


def render_summary_image(summary_text: str, scale: int = 2) -> Image.Image:
    """Rasterize the summary view: dark text on white with padding."""
    font = ImageFont.load_default(size=FONT_SIZE * scale)
    width = VIEW_WIDTH * scale
    padding = VIEW_PADDING * scale

    measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    lines = _wrap(summary_text, font, width - 2 * padding, measure)
    line_height = int(FONT_SIZE * scale * LINE_SPACING)
    height = 2 * padding + line_height * len(lines)

    image = Image.new("RGB", (width, height), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)
    y = padding
    for line in lines:
        draw.text((padding, y), line, font=font, fill=TEXT_COLOR)
        y += line_height
    return image


def image_to_pdf(image: Image.Image) -> bytes:
    """Embed an image on one A4 page, scaled to the page width."""
    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.add_page()
    ratio = image.width / image.height
    pdf.image(image, x=0, y=0, w=pdf.w, h=pdf.w / ratio)
    return bytes(pdf.output())


def export_summary(title: str, summary_text: str, export_format: ExportFormat) -> ExportArtifact:
    """Build the artifact for one format. Text and Markdown are verbatim."""
    if export_format is ExportFormat.PDF:
        content = image_to_pdf(render_summary_image(summary_text))
    else:
        content = summary_text.encode("utf-8")

    return ExportArtifact(
        filename=export_filename(title, export_format),
        media_type=MEDIA_TYPES[export_format],
        content=content,
    )
