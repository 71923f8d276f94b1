"""
Renders a Presentation as Marp markdown.

Layout:
    ---
    marp: true
    theme: <theme>
    ---

    # <presentation title>

    <first slide content, one line each>

    ---

    ## <slide title>

    - <bullet>
    <!-- Notes: <notes line> -->   (one per line of notes)

The first slide is the title slide: its own title is replaced by the
presentation title and its content is written as plain description lines.
Separators are only written in front of a slide, so the markup never ends
with an empty slide.
"""
import re
from typing import List

from models import Presentation, Slide

SLIDE_SEPARATOR = "---"

# Any markdown thematic break (---, ***, ___, - - -); Marp starts a new slide on these
THEMATIC_BREAK = re.compile(r"^([-*_])(?:\s*\1){2,}$")


def escape_line(text: str) -> str:
    """Backslash-escapes a line that would otherwise split the slide."""
    if THEMATIC_BREAK.match(text.strip()):
        return "\\" + text.strip()
    return text


def front_matter(theme: str) -> List[str]:
    return [SLIDE_SEPARATOR, "marp: true", f"theme: {theme}", SLIDE_SEPARATOR]


def slide_block(slide: Slide) -> List[str]:
    """Markup for one body slide, without its leading separator."""
    lines = [f"## {slide.title}", ""]
    lines.extend(f"- {escape_line(item)}" for item in slide.content)
    if slide.notes:
        # One comment per line so each stays a single-line comment
        lines.extend(f"<!-- Notes: {note.strip()} -->" for note in slide.notes.splitlines() if note.strip())
    return lines


def to_marp_markdown(presentation: Presentation, theme: str) -> str:
    """Serializes a presentation with the given Marp theme. Output is deterministic."""
    lines = front_matter(theme)
    lines += ["", f"# {presentation.title}"]

    slides = presentation.slides
    if slides and slides[0].content:
        lines.append("")
        lines.extend(escape_line(line) for line in slides[0].content)

    for slide in slides[1:]:
        lines += ["", SLIDE_SEPARATOR, ""]
        lines.extend(slide_block(slide))

    return "\n".join(lines).rstrip() + "\n"
