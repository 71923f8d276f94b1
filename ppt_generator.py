import io
import logging
import re

from pptx import Presentation
from pptx.util import Inches, Pt
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN, MSO_ANCHOR

import models

logger = logging.getLogger(__name__)

PPTX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

# --- 1. Design Constants ---
# Colors
ACCENT_BLUE = RGBColor(2, 132, 199)
TEXT_COLOR = RGBColor(32, 33, 36)
DARK_GRAY = RGBColor(64, 64, 64)
# Slide Dimensions (16:9)
SLIDE_WIDTH = Inches(16)
SLIDE_HEIGHT = Inches(9)
# Margins
MARGIN_LEFT = Inches(1.0)
MARGIN_RIGHT = Inches(1.0)
MARGIN_TOP = Inches(0.8)
MARGIN_BOTTOM = Inches(0.8)
# Fonts
FONT_HEADLINE = 'Calibri'
FONT_BODY = 'Calibri'
FONT_CODE = 'Consolas'
TITLE_FONT_SIZE = Pt(54)
DESCRIPTION_FONT_SIZE = Pt(24)
SLIDE_TITLE_FONT_SIZE = Pt(36)
BODY_FONT_SIZE = Pt(24)

# python-pptx gets slow and odd with very long runs
MAX_TEXT_LENGTH = 1000

# Inline markdown the generator commonly emits: **bold** and `code`
INLINE_MARKUP = re.compile(r'(\*\*.*?\*\*|`[^`]+`)')

# --- 2. Helper Functions ---

def truncate(text, limit=MAX_TEXT_LENGTH):
    if text and len(text) > limit:
        return text[:limit] + "..."
    return text


def add_speaker_notes(slide, notes_text):
    """Adds speaker notes to the slide."""
    if notes_text:
        slide.notes_slide.notes_text_frame.text = truncate(notes_text)


def set_formatted_text_in_frame(text_frame, text, alignment=PP_ALIGN.LEFT):
    """
    Clears a text_frame and fills its first paragraph, honouring
    **bold** and `code` markup.
    """
    text_frame.clear()
    p = text_frame.paragraphs[0]
    p.alignment = alignment
    if not text:
        return
    apply_formatted_text_to_paragraph(p, truncate(text))


def apply_formatted_text_to_paragraph(p, text, font_size=None):
    """
    Parses text with **bold** and `code` markup and adds it as runs
    to a paragraph object.
    """
    if not text:
        return
    for part in INLINE_MARKUP.split(text):
        if not part:
            continue
        run = p.add_run()
        if part.startswith('**') and part.endswith('**') and len(part) > 4:
            run.text = part[2:-2]
            run.font.bold = True
            run.font.name = FONT_BODY
        elif part.startswith('`') and part.endswith('`') and len(part) > 2:
            run.text = part[1:-1]
            run.font.name = FONT_CODE
            run.font.color.rgb = DARK_GRAY
        else:
            run.text = part
            run.font.name = FONT_BODY
        if font_size is not None:
            run.font.size = font_size

# --- 3. Slide Drawing Functions ---

def draw_title_slide(slide, title, description_lines):
    """Draws the title slide: the presentation title and optional description lines."""
    title_shape = slide.shapes.add_textbox(
        Inches(1), Inches(2.5), SLIDE_WIDTH - Inches(2), Inches(2)
    )
    title_tf = title_shape.text_frame
    title_tf.word_wrap = True
    title_tf.vertical_anchor = MSO_ANCHOR.BOTTOM
    set_formatted_text_in_frame(title_tf, title, PP_ALIGN.CENTER)
    for run in title_tf.paragraphs[0].runs:
        run.font.size = TITLE_FONT_SIZE
        run.font.name = FONT_HEADLINE
        run.font.bold = True
        run.font.color.rgb = TEXT_COLOR

    if description_lines:
        desc_shape = slide.shapes.add_textbox(
            Inches(1), Inches(5), SLIDE_WIDTH - Inches(2), Inches(3)
        )
        desc_tf = desc_shape.text_frame
        desc_tf.word_wrap = True
        desc_tf.clear()
        for i, line in enumerate(description_lines):
            p = desc_tf.paragraphs[0] if i == 0 else desc_tf.add_paragraph()
            p.alignment = PP_ALIGN.CENTER
            apply_formatted_text_to_paragraph(p, truncate(line), DESCRIPTION_FONT_SIZE)
    logger.debug(f"Drew title slide: {title}")


def draw_content_slide(slide, data):
    """Draws a titled slide with one bullet paragraph per content line."""
    # Slide Title
    title_shape = slide.shapes.add_textbox(
        MARGIN_LEFT, MARGIN_TOP, SLIDE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT, Inches(1)
    )
    title_tf = title_shape.text_frame
    title_tf.word_wrap = True
    set_formatted_text_in_frame(title_tf, data.title)
    for run in title_tf.paragraphs[0].runs:
        run.font.size = SLIDE_TITLE_FONT_SIZE
        run.font.name = FONT_HEADLINE
        run.font.bold = True
        run.font.color.rgb = ACCENT_BLUE

    body_top = MARGIN_TOP + Inches(1.2)
    body_height = SLIDE_HEIGHT - body_top - MARGIN_BOTTOM
    body_shape = slide.shapes.add_textbox(
        MARGIN_LEFT, body_top, SLIDE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT, body_height
    )
    body_tf = body_shape.text_frame
    body_tf.clear()
    body_tf.word_wrap = True

    for i, item in enumerate(data.content):
        p = body_tf.paragraphs[0] if i == 0 else body_tf.add_paragraph()
        p.level = 1
        p.space_after = Pt(6)
        apply_formatted_text_to_paragraph(p, "• " + truncate(item), BODY_FONT_SIZE)
    logger.debug(f"Drew content slide: {data.title}")

# --- 4. Presentation ---

def create_presentation(presentation: models.Presentation):
    """Creates a python-pptx deck from a parsed presentation."""
    prs = Presentation()
    prs.slide_width = SLIDE_WIDTH
    prs.slide_height = SLIDE_HEIGHT
    blank_layout = prs.slide_layouts[6]

    first = presentation.slides[0] if presentation.slides else None
    title_slide = prs.slides.add_slide(blank_layout)
    draw_title_slide(title_slide, presentation.title, first.content if first else [])
    if first is not None:
        add_speaker_notes(title_slide, first.notes)

    for data in presentation.slides[1:]:
        slide = prs.slides.add_slide(blank_layout)
        draw_content_slide(slide, data)
        add_speaker_notes(slide, data.notes)

    logger.info(f"Built PPTX deck '{presentation.title}' with {len(prs.slides)} slides")
    return prs


def to_pptx_bytes(presentation: models.Presentation) -> bytes:
    buffer = io.BytesIO()
    create_presentation(presentation).save(buffer)
    return buffer.getvalue()
