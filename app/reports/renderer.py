"""
PDF renderer for report section descriptors.

Paints a Report into a paginated A4 document with reportlab's platypus
layout engine:

  - header lines, summaries: paragraphs
  - table sections: a Table whose header row repeats on every page
  - placeholder sections: a single italic paragraph

Pagination rule:
  Before every section except the first, a CondPageBreak starts a new page
  when less than SECTION_MIN_SPACE of vertical space is left, so a section
  title is never stranded at the bottom of a page.

Saving is atomic: the whole document is built in memory first, written to
a temporary file next to the target, then renamed over it. A failure at
any point leaves no file behind and raises ReportRenderError.
"""

import io
import os
import tempfile
from pathlib import Path
from xml.sax.saxutils import escape

import structlog
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    CondPageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from app.exceptions import ReportRenderError
from app.reports.formatting import format_timestamp
from app.schemas.report import Report, ReportSection

logger = structlog.get_logger()

# A section starts on a new page when less than this much space remains
SECTION_MIN_SPACE = 60 * mm

PAGE_MARGIN = 20 * mm

TONE_COLORS = {
    "positive": "#22C55E",
    "negative": "#EF4444",
}


class PdfRenderer:
    """Renders Report objects to PDF bytes or files."""

    def __init__(self, pagesize=A4, section_min_space: float = SECTION_MIN_SPACE):
        self.pagesize = pagesize
        self.section_min_space = section_min_space
        styles = getSampleStyleSheet()
        self._title_style = styles["Title"]
        self._heading_style = styles["Heading2"]
        self._body_style = styles["BodyText"]
        self._placeholder_style = ParagraphStyle(
            "Placeholder",
            parent=styles["BodyText"],
            fontName="Helvetica-Oblique",
            textColor=colors.HexColor("#6B7280"),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, report: Report) -> bytes:
        """
        Build the whole document in memory.

        Raises:
            ReportRenderError: If reportlab fails to lay out the document.
        """
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self.pagesize,
            leftMargin=PAGE_MARGIN,
            rightMargin=PAGE_MARGIN,
            topMargin=PAGE_MARGIN,
            bottomMargin=PAGE_MARGIN,
            title=report.title,
        )

        def draw_footer(canvas, document):
            canvas.saveState()
            canvas.setFont("Helvetica", 8)
            canvas.setFillColor(colors.grey)
            canvas.drawString(
                PAGE_MARGIN,
                PAGE_MARGIN / 2,
                f"{report.title} - {report.period_label} - generated {format_timestamp(report.generated_at)}",
            )
            canvas.drawRightString(
                self.pagesize[0] - PAGE_MARGIN,
                PAGE_MARGIN / 2,
                f"Page {document.page}",
            )
            canvas.restoreState()

        try:
            doc.build(
                self.build_story(report, doc.width),
                onFirstPage=draw_footer,
                onLaterPages=draw_footer,
            )
        except Exception as exc:
            logger.error("report_layout_failed", file_name=report.file_name, error=str(exc))
            raise ReportRenderError(report.file_name, str(exc)) from exc

        return buffer.getvalue()

    def save(self, report: Report, directory: str | os.PathLike) -> Path:
        """
        Render the report and write it to ``directory / report.file_name``.

        The file only appears once it is complete.

        Returns:
            Path of the written file.

        Raises:
            ReportRenderError: If rendering or writing fails.
        """
        content = self.render(report)

        target_dir = Path(directory)
        target = target_dir / report.file_name
        tmp_path = None
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=target_dir, prefix=".", suffix=".tmp", delete=False
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, target)
        except OSError as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ReportRenderError(report.file_name, str(exc)) from exc

        logger.info("report_saved", path=str(target), size_bytes=len(content))
        return target

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def build_story(self, report: Report, width: float) -> list:
        """Flowables for every section, in report order."""
        story = []
        for index, section in enumerate(report.sections):
            if index > 0:
                story.append(CondPageBreak(self.section_min_space))
            story.extend(self._section_flowables(section, width, is_first=index == 0))
        return story

    def _section_flowables(self, section: ReportSection, width: float, is_first: bool) -> list:
        title_style = self._title_style if is_first else self._heading_style
        flowables = [Paragraph(escape(section.title), title_style)]

        for line in section.lines:
            text = f"<b>{escape(line.label)}:</b> {escape(line.value)}"
            if line.tone in TONE_COLORS:
                text = f'<font color="{TONE_COLORS[line.tone]}">{text}</font>'
            flowables.append(Paragraph(text, self._body_style))

        if section.placeholder is not None:
            flowables.append(Paragraph(escape(section.placeholder), self._placeholder_style))
        elif section.columns:
            flowables.append(self._table(section, width))

        flowables.append(Spacer(1, 6 * mm))
        return flowables

    def _table(self, section: ReportSection, width: float) -> Table:
        style = section.style
        data = [section.columns] + section.rows
        table = Table(
            data,
            colWidths=self._column_widths(len(section.columns), width, style.get("wide_column")),
            repeatRows=1,
        )

        commands = [
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(style.get("header_fill", "#3B82F6"))),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor(style.get("header_text", "#FFFFFF"))),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), style.get("font_size", 10)),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#D1D5DB")),
        ]
        zebra = style.get("zebra_fill")
        if zebra:
            commands.append(
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor(zebra)])
            )
        table.setStyle(TableStyle(commands))
        return table

    @staticmethod
    def _column_widths(count: int, width: float, wide_column: int | None) -> list[float]:
        if wide_column is None or not 0 <= wide_column < count or count == 1:
            return [width / count] * count
        wide = width * 0.35
        narrow = (width - wide) / (count - 1)
        return [wide if index == wide_column else narrow for index in range(count)]
