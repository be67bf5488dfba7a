"""
Pydantic schemas for report section descriptors.

A report is an ordered list of sections. Each section is renderer-agnostic:
a title plus one of a table (columns + rows of string cells), a block of
label/value lines, or a placeholder text. The PDF renderer and the JSON
endpoints consume the same structure.

Style hints never affect what a report says, only how it looks.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

ReportKind = Literal["monthly", "annual"]


class ReportLine(BaseModel):
    """One "label: value" line of a text block (e.g. a summary)."""
    label: str
    value: str
    # "positive" / "negative" tint for balances; None for neutral text
    tone: Literal["positive", "negative"] | None = None


class ReportSection(BaseModel):
    """One titled block of a report."""
    key: str
    title: str
    columns: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    lines: list[ReportLine] = Field(default_factory=list)
    placeholder: str | None = None
    style: dict[str, Any] = Field(default_factory=dict)


class Report(BaseModel):
    """A fully assembled report, ready for rendering."""
    kind: ReportKind
    title: str
    period_label: str
    generated_at: datetime
    file_name: str
    sections: list[ReportSection]

    def section(self, key: str) -> ReportSection:
        """Look up a section by key. Raises KeyError if absent."""
        for section in self.sections:
            if section.key == key:
                return section
        raise KeyError(key)
