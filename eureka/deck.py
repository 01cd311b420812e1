"""
Deck assembly: maps an Outline or an IdeaRecord to PPTX slides.

Slide planning (`outline_slides`, `idea_slides`) is independent of the
document encoder; `render_pptx` turns the planned slides into bytes with
python-pptx.
"""

from __future__ import annotations

import asyncio
import logging
import math
import re
from dataclasses import dataclass, field
from io import BytesIO
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.util import Inches, Pt

from eureka.config import DECK_FOOTER, PPTX_MIME_TYPE
from eureka.models import IdeaRatings, IdeaRecord, Outline

if TYPE_CHECKING:
    from eureka.presenton import PresentonClient

logger = logging.getLogger(__name__)

FILLED_STAR = "★"
EMPTY_STAR = "☆"
MAX_STARS = 5

_BRACES_RE = re.compile(r"[{}]")
_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9_\-]+")

# Layout in inches on a 16:9 (10 x 5.625) slide
_SLIDE_WIDTH = 10
_SLIDE_HEIGHT = 5.625
_BLANK_LAYOUT = 6


@dataclass(frozen=True)
class SlideSpec:
    """One planned slide. `kind` is "title" for cover slides, "content" otherwise."""
    kind: str
    title: str
    body: Tuple[str, ...] = ()
    subtitle: Optional[str] = None
    footer: Optional[str] = None


@dataclass
class Deck:
    content: bytes
    filename: str
    media_type: str = PPTX_MIME_TYPE
    source: str = "local"
    slides: List[SlideSpec] = field(default_factory=list)


def sanitize(text: Optional[str]) -> str:
    """Strip curly braces from free text before it is placed on a slide."""
    return _BRACES_RE.sub("", text or "")


def stars(n: float) -> str:
    """Render a 0-5 score as filled and empty star glyphs, e.g. 3.4 -> ★★★☆☆."""
    clamped = min(float(MAX_STARS), max(0.0, float(n)))
    # round half up, as a score of 2.5 should show three stars
    k = int(math.floor(clamped + 0.5))
    return FILLED_STAR * k + EMPTY_STAR * (MAX_STARS - k)


def deck_filename(title: Optional[str]) -> str:
    return f"{_UNSAFE_FILENAME_RE.sub('_', title or 'Eureka_Pitch')}.pptx"


# --------------------------------------------------
# Outline decks
# --------------------------------------------------

def outline_slides(outline: Outline) -> List[SlideSpec]:
    """A cover slide, then one heading-only slide per outline entry."""
    slides = [SlideSpec(kind="title", title=sanitize(outline.title), footer=DECK_FOOTER)]
    slides.extend(SlideSpec(kind="content", title=sanitize(s.title)) for s in outline.slides)
    return slides


# --------------------------------------------------
# Idea decks
# --------------------------------------------------

RATING_LABELS = [
    ("feasibility", "Feasibility"),
    ("innovation", "Innovation"),
    ("public_impact", "Public impact/Market"),
    ("time_to_mvp", "Time-to-MVP"),
    ("revenue", "Revenue potential"),
]


def rating_lines(ratings: IdeaRatings) -> List[str]:
    lines = []
    for attr, label in RATING_LABELS:
        value = getattr(ratings, attr)
        if value is not None:
            lines.append(f"{label}: {stars(value)}")
    if ratings.overall is not None:
        lines.append(f"Overall: {ratings.overall:.1f} / 5")
    return lines


def _title_slide(idea: IdeaRecord) -> SlideSpec:
    return SlideSpec(
        kind="title",
        title=sanitize(idea.title),
        subtitle=sanitize(idea.pitch) if idea.pitch else None,
        footer=DECK_FOOTER,
    )


def _text_slide(heading: str, attr: str) -> Callable[[IdeaRecord], SlideSpec]:
    def build(idea: IdeaRecord) -> SlideSpec:
        return SlideSpec(kind="content", title=heading, body=(sanitize(getattr(idea, attr)),))
    return build


def _execution_slide(idea: IdeaRecord) -> SlideSpec:
    body = []
    if idea.mvp_time:
        body.append(sanitize(f"Time to MVP: {idea.mvp_time}"))
    body.extend(sanitize(f"• {v}") for v in idea.validation)
    return SlideSpec(kind="content", title="Execution / Feasibility", body=tuple(body))


def _ratings_slide(idea: IdeaRecord) -> SlideSpec:
    return SlideSpec(kind="content", title="Ratings", body=tuple(rating_lines(idea.ratings)))


def _notes_slide(idea: IdeaRecord) -> SlideSpec:
    return SlideSpec(
        kind="content",
        title="The ask & Notes",
        body=tuple(sanitize(f"• {n}") for n in idea.notes),
    )


# (name, predicate, builder), evaluated in order
IDEA_SLIDES: Sequence[Tuple[str, Callable[[IdeaRecord], bool], Callable[[IdeaRecord], SlideSpec]]] = (
    ("title", lambda idea: True, _title_slide),
    ("problem", lambda idea: bool(idea.problem), _text_slide("Problem", "problem")),
    ("solution", lambda idea: bool(idea.solution), _text_slide("Solution & How it works", "solution")),
    ("market", lambda idea: bool(idea.market), _text_slide("Market/users & Why now", "market")),
    ("differentiator", lambda idea: bool(idea.differentiator),
     _text_slide("Edge / Differentiator", "differentiator")),
    ("execution", lambda idea: bool(idea.validation) or bool(idea.mvp_time), _execution_slide),
    ("ratings", lambda idea: idea.ratings is not None, _ratings_slide),
    ("notes", lambda idea: bool(idea.notes), _notes_slide),
)


def idea_slide_names(idea: IdeaRecord) -> List[str]:
    """Names of the IDEA_SLIDES entries that apply to `idea`, in deck order."""
    return [name for name, applies, _ in IDEA_SLIDES if applies(idea)]


def idea_slides(idea: IdeaRecord) -> List[SlideSpec]:
    return [build(idea) for _, applies, build in IDEA_SLIDES if applies(idea)]


# --------------------------------------------------
# Encoding
# --------------------------------------------------

def _add_text(slide, lines: Sequence[str], left, top, width, height=None,
              size: int = 18, bold: bool = False, color: Optional[str] = None) -> None:
    box = slide.shapes.add_textbox(
        Inches(left), Inches(top), Inches(width), Inches(height if height is not None else 0.8)
    )
    tf = box.text_frame
    tf.word_wrap = True
    paragraphs = [part for line in lines for part in line.split("\n")] or [""]
    for i, text in enumerate(paragraphs):
        p = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
        p.text = text
        p.font.size = Pt(size)
        p.font.bold = bold
        if color:
            p.font.color.rgb = RGBColor.from_string(color)


def render_pptx(slides: Sequence[SlideSpec]) -> bytes:
    """Encode planned slides as a 16:9 PPTX document."""
    prs = Presentation()
    prs.slide_width = Inches(_SLIDE_WIDTH)
    prs.slide_height = Inches(_SLIDE_HEIGHT)
    layout = prs.slide_layouts[_BLANK_LAYOUT]

    for spec in slides:
        slide = prs.slides.add_slide(layout)
        if spec.kind == "title":
            _add_text(slide, [spec.title], 0.5, 1.2, 9, 1.5, size=36, bold=True)
            if spec.subtitle:
                _add_text(slide, [spec.subtitle], 0.6, 2.6, 8.6, size=18, color="333333")
            if spec.footer:
                _add_text(slide, [spec.footer], 0.5, 3.6, 9, size=14, color="666666")
        else:
            _add_text(slide, [spec.title], 0.5, 0.6, 9, 1, size=28, bold=True)
            if spec.body:
                _add_text(slide, spec.body, 0.6, 1.4, 8.6, 3.8, size=18)

    buffer = BytesIO()
    prs.save(buffer)
    return buffer.getvalue()


def build_outline_deck(outline: Outline) -> Deck:
    slides = outline_slides(outline)
    return Deck(content=render_pptx(slides), filename=deck_filename(None), slides=slides)


def build_idea_deck(idea: IdeaRecord) -> Deck:
    slides = idea_slides(idea)
    return Deck(content=render_pptx(slides), filename=deck_filename(idea.title), slides=slides)


async def assemble_idea_deck(idea: IdeaRecord, remote: Optional["PresentonClient"] = None) -> Deck:
    """
    Build a deck for `idea`, asking the remote generator first when one is given.
    Any remote failure falls back to local generation.
    """
    if remote is not None:
        content = await remote.generate(idea)
        if content is not None:
            return Deck(content=content, filename=deck_filename(idea.title), source="remote")
        logger.info("Remote deck generation unavailable, building locally")
    return await asyncio.to_thread(build_idea_deck, idea)
