"""Best-effort section parsing for markdown summaries.

Display-only: the summary flow does not guarantee any heading structure, so
parsing never fails. Text without `## ` headings renders as one untitled block.
"""

import re

from backend.app.models.study import SummarySection

_HEADING_RE = re.compile(r"^## ", re.MULTILINE)


def parse_summary_sections(text: str, *, drop_incomplete: bool = False) -> list[SummarySection]:
    """Split a markdown summary into titled sections.

    Each `## ` heading line starts a section; its first line is the title and
    the remaining lines are the body.

    Args:
        text: Raw markdown summary
        drop_incomplete: Drop chunks missing a title or a body, and any text
            before the first heading, instead of keeping them

    Returns:
        Sections in document order
    """
    if not text or not text.strip():
        return []

    chunks = _HEADING_RE.split(text)

    if len(chunks) == 1:
        return [SummarySection(title=None, content=text.strip())]

    sections: list[SummarySection] = []

    preamble = chunks[0].strip()
    if preamble and not drop_incomplete:
        sections.append(SummarySection(title=None, content=preamble))

    for chunk in chunks[1:]:
        first_line, _, rest = chunk.partition("\n")
        title = first_line.strip()
        body = rest.strip()

        if drop_incomplete:
            if title and body:
                sections.append(SummarySection(title=title, content=body))
            continue

        if not title and not body:
            continue
        sections.append(SummarySection(title=title or None, content=body))

    return sections
