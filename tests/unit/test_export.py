"""Tests for summary export artifacts."""

from PIL import Image

from lexora.client.export import (
    ExportFormat,
    export_filename,
    export_summary,
    image_to_pdf,
    render_summary_image,
)

SUMMARY = "# Weekly Sync\n\n- Ship v2 on **Friday**\n- Café budget: EUR 1,200\n"


class TestExportFilename:
    def test_non_alphanumerics_become_underscores(self):
        assert export_filename("Q3 Budget: Review!", ExportFormat.PDF) == "q3_budget__review_.pdf"

    def test_empty_title_falls_back(self):
        assert export_filename("", ExportFormat.TEXT) == "summary.txt"


class TestExportSummary:
    def test_markdown_is_byte_identical(self):
        artifact = export_summary("Weekly Sync", SUMMARY, ExportFormat.MARKDOWN)

        assert artifact.content == SUMMARY.encode("utf-8")
        assert artifact.media_type == "text/markdown"
        assert artifact.filename == "weekly_sync.md"

    def test_text_is_byte_identical(self):
        artifact = export_summary("Weekly Sync", SUMMARY, ExportFormat.TEXT)

        assert artifact.content == SUMMARY.encode("utf-8")
        assert artifact.media_type == "text/plain"

    def test_pdf_is_a_pdf(self):
        artifact = export_summary("Weekly Sync", SUMMARY, ExportFormat.PDF)

        assert artifact.content.startswith(b"%PDF")
        assert artifact.media_type == "application/pdf"
        assert artifact.filename == "weekly_sync.pdf"


class TestRendering:
    def test_image_is_scaled_view_width(self):
        image = render_summary_image("hello", scale=2)

        assert image.width == 1440
        assert image.getpixel((0, 0)) == (255, 255, 255)

    def test_long_text_wraps_into_taller_image(self):
        short = render_summary_image("one line")
        long = render_summary_image("word " * 400)

        assert long.height > short.height

    def test_pdf_from_arbitrary_image(self):
        image = Image.new("RGB", (200, 100), "white")

        content = image_to_pdf(image)

        assert content.startswith(b"%PDF")
        assert content.rstrip().endswith(b"%%EOF")
