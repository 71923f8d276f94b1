"""
Turns a generation model's free-form reply into a Presentation.

The reply has no guaranteed grammar, so every function here is total: any
string produces a structurally valid result and nothing raises on odd input.

Pipeline:
    raw reply -> extract_markdown -> strip_front_matter
              -> parse_slides (line classifier + state machine)
              -> resolve_title
              -> Presentation
"""
import logging
import re
from enum import Enum
from functools import reduce
from typing import List, NamedTuple, Optional, Tuple

from models import Presentation, Slide

logger = logging.getLogger(__name__)

FALLBACK_SLIDE_TITLE = "Presentation Summary"
FALLBACK_MESSAGE = (
    "The generated content could not be split into individual slides.",
    "The beginning of the generated text is shown below.",
)
FALLBACK_EXCERPT_LENGTH = 100

# Title for a slide opened by bullets that appear before any heading
IMPLICIT_SLIDE_TITLE = "Overview"
UNTITLED_SLIDE_TITLE = "Untitled Slide"

FENCE_LABELS = ("", "md", "markdown")

HEADING_PREFIX = re.compile(r"^#+\s*")
# ATX heading: one to six # followed by whitespace or end of line, so "#hashtag" is text
HEADING_MARKER = re.compile(r"^#{1,6}(?:\s|$)")
SLIDE_NUMBER_PREFIX = re.compile(r"^Slide \d+:\s*")
TITLE_SLIDE_PREFIX = "Title Slide:"
CONCLUSION_PREFIX = "Conclusion:"
DIVIDER = re.compile(r"^-{3,}$")
FRONT_MATTER_DIRECTIVE = re.compile(r"^[A-Za-z_][\w-]*\s*:")
NOTES_COMMENT = re.compile(r"^<!--\s*Notes:\s*(.*?)\s*-->$", re.IGNORECASE)


# --- 1. Fence extraction ---

def extract_markdown(text: str) -> str:
    """
    Returns the trimmed body of the first ```md, ```markdown or unlabeled
    fence in the text, or the trimmed text itself when there is none.

    An opener that is never closed runs to the end of the text, which is
    what a reply cut off by the token limit looks like.
    """
    lines = text.splitlines()
    i = 0
    while i < len(lines):
        stripped = lines[i].strip()
        if not stripped.startswith("```"):
            i += 1
            continue

        label = stripped[3:].strip().lower()
        end = i + 1
        while end < len(lines) and not lines[end].strip().startswith("```"):
            end += 1

        body = "\n".join(lines[i + 1:end]).strip()
        if label in FENCE_LABELS and body:
            return body
        # Skip the whole block, including its closing fence
        i = end + 1

    return text.strip()


def strip_front_matter(text: str) -> str:
    """Removes a leading Marp front-matter block (``---`` directives ``---``)."""
    lines = text.strip().splitlines()
    if not lines or lines[0].strip() != "---":
        return text.strip()

    for end in range(1, len(lines)):
        if lines[end].strip() == "---":
            directives = [l for l in lines[1:end] if l.strip()]
            if all(FRONT_MATTER_DIRECTIVE.match(l.strip()) for l in directives):
                return "\n".join(lines[end + 1:]).strip()
            break
    return text.strip()


# --- 2. Line classification ---

class LineKind(Enum):
    HEADING = "heading"
    SLIDE_MARKER = "slide_marker"
    BULLET = "bullet"
    PLAIN_TEXT = "plain_text"
    DIVIDER = "divider"
    CODE_FENCE = "code_fence"
    COMMENT_OPENER = "comment_opener"
    BLANK = "blank"


class ClassifiedLine(NamedTuple):
    kind: LineKind
    # Slide title for boundaries, item text for bullets and plain text,
    # notes text for a "Notes:" comment; empty otherwise.
    text: str = ""


def _marker_title(line: str) -> Optional[str]:
    """Returns the slide title for a 'Slide N:' / 'Title Slide:' / 'Conclusion:' line, else None."""
    match = SLIDE_NUMBER_PREFIX.match(line)
    if match:
        return line[match.end():].strip()
    if line.startswith(TITLE_SLIDE_PREFIX):
        return line[len(TITLE_SLIDE_PREFIX):].strip()
    if line.startswith(CONCLUSION_PREFIX):
        return line.replace(CONCLUSION_PREFIX, "Conclusion", 1).strip()
    return None


def classify_line(line: str) -> ClassifiedLine:
    """Classifies a single line of generated text."""
    line = line.strip()
    if not line:
        return ClassifiedLine(LineKind.BLANK)

    if HEADING_MARKER.match(line):
        title = HEADING_PREFIX.sub("", line)
        # "## Slide 2: Details" carries both markers
        marker_title = _marker_title(title)
        return ClassifiedLine(LineKind.HEADING, marker_title if marker_title is not None else title.strip())

    marker_title = _marker_title(line)
    if marker_title is not None:
        return ClassifiedLine(LineKind.SLIDE_MARKER, marker_title)

    if line.startswith("- ") or line.startswith("* "):
        return ClassifiedLine(LineKind.BULLET, line[2:].strip())

    if DIVIDER.match(line):
        return ClassifiedLine(LineKind.DIVIDER)

    if "```" in line:
        return ClassifiedLine(LineKind.CODE_FENCE)

    if line.startswith("<!--"):
        notes = NOTES_COMMENT.match(line)
        return ClassifiedLine(LineKind.COMMENT_OPENER, notes.group(1) if notes else "")

    return ClassifiedLine(LineKind.PLAIN_TEXT, line)


# --- 3. Slide state machine ---

class SlideDraft(NamedTuple):
    title: str
    content: Tuple[str, ...] = ()
    notes: Optional[str] = None


class ParserState(NamedTuple):
    slides: Tuple[Slide, ...] = ()
    # None while no slide has been opened yet
    current: Optional[SlideDraft] = None


INITIAL_STATE = ParserState()


def _flush(state: ParserState) -> Tuple[Slide, ...]:
    """Returns the finished slides plus the current draft if it has content."""
    draft = state.current
    if draft is None or not draft.content:
        return state.slides
    logger.debug("Slide %d finished: %s (%d lines)", len(state.slides) + 1, draft.title, len(draft.content))
    return state.slides + (Slide(title=draft.title, content=list(draft.content), notes=draft.notes),)


def step(state: ParserState, line: str) -> ParserState:
    """Applies one line of input to the parser state."""
    kind, text = classify_line(line)

    if kind in (LineKind.HEADING, LineKind.SLIDE_MARKER):
        return ParserState(_flush(state), SlideDraft(text or UNTITLED_SLIDE_TITLE))

    if kind is LineKind.BULLET:
        draft = state.current or SlideDraft(IMPLICIT_SLIDE_TITLE)
        return state._replace(current=draft._replace(content=draft.content + (text,)))

    if state.current is None:
        return state

    if kind is LineKind.PLAIN_TEXT:
        return state._replace(current=state.current._replace(content=state.current.content + (text,)))

    if kind is LineKind.COMMENT_OPENER and text:
        notes = f"{state.current.notes}\n{text}" if state.current.notes else text
        return state._replace(current=state.current._replace(notes=notes))

    # Blank lines, dividers, code fences and other comments carry no content
    return state


def finish(state: ParserState) -> List[Slide]:
    return list(_flush(state))


def fallback_slide(raw_text: str) -> Slide:
    excerpt = raw_text[:FALLBACK_EXCERPT_LENGTH] + "..."
    return Slide(title=FALLBACK_SLIDE_TITLE, content=[*FALLBACK_MESSAGE, excerpt])


def parse_slides(raw_text: str) -> List[Slide]:
    """
    Splits generated text into slides. Always returns at least one slide:
    text with no recognizable structure becomes a single summary slide.
    """
    slides = finish(reduce(step, raw_text.splitlines(), INITIAL_STATE))
    if not slides:
        logger.warning("No slide structure found in %d characters of generated text, using summary slide", len(raw_text))
        slides = [fallback_slide(raw_text)]
    return slides


# --- 4. Title resolution ---

def _clean_title(text: str) -> str:
    return text.strip().strip("#:* \t").strip()


def resolve_title(generated_text: str, source_content: str) -> str:
    """
    Picks a presentation title.

    1. The first line mentioning "Presentation Title" or "Title:", with the label removed.
    2. The first non-blank line of the generated text, without heading markers.
    3. "Presentation on " followed by the first five words of the source content.
    """
    lines = generated_text.splitlines()

    for line in lines:
        if "Presentation Title" in line or "Title:" in line:
            title = _clean_title(line.replace("Presentation Title", "").replace("Title:", ""))
            if title:
                return title
            break

    for line in lines:
        if line.strip():
            title = HEADING_PREFIX.sub("", line.strip()).strip()
            if title:
                return title
            break

    return "Presentation on " + " ".join(source_content.split()[:5])


# --- 5. Pipeline ---

def parse_presentation(raw_text: str, source_content: str = "") -> Presentation:
    """Builds a Presentation from a raw model reply and the document it was generated from."""
    markdown = strip_front_matter(extract_markdown(raw_text))
    slides = parse_slides(markdown)
    title = resolve_title(markdown, source_content)
    logger.info("Parsed presentation '%s' with %d slides", title, len(slides))
    return Presentation(title=title, slides=slides)
