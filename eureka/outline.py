"""
Parsers for the markdown the idea assistant produces.

The assistant is prompted to answer with fixed `###` sections; these helpers
pull structured data back out of a reply.
"""

import re
from typing import List, Optional, Pattern, Tuple

from eureka.config import DEFAULT_DECK_TITLE
from eureka.models import Outline, OutlineSlide

SLIDE_OUTLINE_MARKER = re.compile(r"^\s*### slide outline", re.IGNORECASE)
IDEA_DIRECTIONS_MARKER = re.compile(r"^\s*###\s*tailored idea directions", re.IGNORECASE)

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_NUMBERED_RE = re.compile(r"^\s*(\d+)\.\s+(.*)$")
_LIST_ITEM_RE = re.compile(r"^\s*(?:[-*]|\d+\.)\s+(.*)$")


def _section_lines(markdown: str, marker: Pattern[str]) -> Optional[List[str]]:
    """
    Lines following the first line matching `marker`, up to the next `### `
    heading. None when the marker is absent.
    """
    lines = _LINE_SPLIT_RE.split(markdown)
    for i, line in enumerate(lines):
        if marker.match(line):
            section = []
            for following in lines[i + 1:]:
                if following.strip().startswith("### "):
                    break
                section.append(following)
            return section
    return None


def _index_key(digits: str) -> Tuple[int, str]:
    # Compare digit strings by magnitude without int(), which refuses very long strings
    significant = digits.lstrip("0")
    return len(significant), significant


def parse_outline(markdown: str, fallback_title: Optional[str] = None) -> Optional[Outline]:
    """
    Build an Outline from the numbered list under the "### Slide outline" heading.

    Entries are ordered by their declared number, not by where they appear;
    duplicate numbers are all kept. Returns None when there is no such
    heading or it has no numbered lines.
    """
    section = _section_lines(markdown, SLIDE_OUTLINE_MARKER)
    if section is None:
        return None

    numbered = []
    for line in section:
        match = _NUMBERED_RE.match(line)
        if match:
            numbered.append((_index_key(match.group(1)), match.group(2).strip()))
    if not numbered:
        return None

    # sorted() is stable, so equal indices keep their order of appearance
    numbered = sorted(numbered, key=lambda entry: entry[0])
    return Outline(
        title=fallback_title or DEFAULT_DECK_TITLE,
        slides=[OutlineSlide(title=text) for _, text in numbered],
    )


def extract_idea_titles(markdown: str, limit: int = 5) -> List[str]:
    """Idea headlines listed under "### Tailored idea directions"."""
    section = _section_lines(markdown, IDEA_DIRECTIONS_MARKER)
    if not section:
        return []

    titles = []
    for line in section:
        match = _LIST_ITEM_RE.match(line)
        if match:
            text = match.group(1).strip().replace("*", "").replace("_", "")
            if text:
                titles.append(text)
    return titles[:limit]
