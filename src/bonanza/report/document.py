"""Markdown report assembly.

A ``ReportDocument`` is an ordered list of sections. A section either has
content (text, an optional table, an optional figure) or is marked
unavailable with the reason its computation failed. An unavailable section
may still carry a figure, which is linked below the note.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

__all__ = ['ReportSection', 'ReportDocument']

logger = logging.getLogger(__name__)


@dataclass
class ReportSection:
    title: str
    text: str = ""
    table: Optional[str] = None
    figure: Optional[Path] = None
    figure_alt: str = ""
    unavailable_reason: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.unavailable_reason is None


@dataclass
class ReportDocument:
    """Ordered collection of report sections, written as Markdown."""
    title: str
    intro: str = ""
    sections: List[ReportSection] = field(default_factory=list)

    def add(self, section: ReportSection) -> ReportSection:
        self.sections.append(section)
        return section

    def add_unavailable(self, title: str, reason: str, figure: Optional[Path] = None,
                        figure_alt: str = "") -> ReportSection:
        """Mark a section unavailable. A chart, if one was drawn, is still linked."""
        return self.add(ReportSection(
            title=title, figure=figure, figure_alt=figure_alt, unavailable_reason=reason
        ))

    def to_markdown(self, base_dir: Optional[Path] = None) -> str:
        """Render the document. Figure links are made relative to ``base_dir``."""
        parts = [f"# {self.title}", ""]
        if self.intro:
            parts += [self.intro, ""]

        for section in self.sections:
            parts += [f"## {section.title}", ""]
            if not section.available:
                parts += [f"*Section unavailable: {section.unavailable_reason}*", ""]
            if section.figure is not None:
                link = Path(section.figure)
                if base_dir is not None:
                    link = Path(os.path.relpath(link, base_dir))
                parts += [f"![{section.figure_alt or section.title}]({link.as_posix()})", ""]
            if not section.available:
                continue
            if section.table:
                parts += [section.table, ""]
            if section.text:
                parts += [section.text, ""]

        return "\n".join(parts).rstrip() + "\n"

    def write(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_markdown(base_dir=path.parent), encoding="utf-8")
        logger.info("Report written: %s", path)
        return path
