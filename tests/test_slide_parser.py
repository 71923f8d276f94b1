import pytest

from slide_parser import (
    FALLBACK_SLIDE_TITLE,
    IMPLICIT_SLIDE_TITLE,
    INITIAL_STATE,
    UNTITLED_SLIDE_TITLE,
    LineKind,
    classify_line,
    extract_markdown,
    finish,
    parse_presentation,
    parse_slides,
    resolve_title,
    step,
    strip_front_matter,
)


# --- extract_markdown ---

def test_extract_md_fence():
    assert extract_markdown("```md\n# X\n```") == "# X"


def test_extract_without_fence_returns_trimmed_input():
    assert extract_markdown("  # Plain\n- item  \n") == "# Plain\n- item"


@pytest.mark.parametrize("label", ["markdown", "MD", "Markdown", ""])
def test_extract_accepted_labels(label):
    text = f"Here you go:\n```{label}\n# Deck\n- one\n```\nEnjoy!"
    assert extract_markdown(text) == "# Deck\n- one"


def test_extract_skips_other_languages():
    text = "```python\nprint(1)\n```\n\n```md\n# Real\n```"
    assert extract_markdown(text) == "# Real"


def test_extract_returns_first_matching_fence():
    text = "```md\n# First\n```\n```md\n# Second\n```"
    assert extract_markdown(text) == "# First"


def test_extract_unclosed_fence_runs_to_end():
    assert extract_markdown("```md\n# Cut\n- off mid") == "# Cut\n- off mid"


@pytest.mark.parametrize("text", [
    "",
    "no fences here",
    "```md\n# X\n```",
    "```python\nx = 1\n```",
    "intro\n```\n# A\n```python\ncode\n```\n```",
    "```md\n```\nleft over",
])
def test_extract_is_idempotent(text):
    once = extract_markdown(text)
    assert extract_markdown(once) == once


# --- strip_front_matter ---

def test_strip_front_matter_removes_marp_directives():
    text = "---\nmarp: true\ntheme: gaia\n---\n\n# Title"
    assert strip_front_matter(text) == "# Title"


def test_strip_front_matter_keeps_leading_divider_with_prose():
    text = "---\nNot a directive line\n---\n# Title"
    assert strip_front_matter(text) == text


# --- classify_line ---

@pytest.mark.parametrize("line,kind,text", [
    ("", LineKind.BLANK, ""),
    ("    ", LineKind.BLANK, ""),
    ("# Intro", LineKind.HEADING, "Intro"),
    ("## Details", LineKind.HEADING, "Details"),
    ("## Slide 2: Details", LineKind.HEADING, "Details"),
    ("Slide 3: Results", LineKind.SLIDE_MARKER, "Results"),
    ("Title Slide: Welcome", LineKind.SLIDE_MARKER, "Welcome"),
    ("Conclusion: Wrap up", LineKind.SLIDE_MARKER, "Conclusion Wrap up"),
    ("- point", LineKind.BULLET, "point"),
    ("* point", LineKind.BULLET, "point"),
    ("---", LineKind.DIVIDER, ""),
    ("```python", LineKind.CODE_FENCE, ""),
    ("<!-- _class: lead -->", LineKind.COMMENT_OPENER, ""),
    ("<!-- Notes: say this -->", LineKind.COMMENT_OPENER, "say this"),
    ("Just prose.", LineKind.PLAIN_TEXT, "Just prose."),
    ("#1 priority", LineKind.PLAIN_TEXT, "#1 priority"),
    ("#hashtag", LineKind.PLAIN_TEXT, "#hashtag"),
    ("####### seven", LineKind.PLAIN_TEXT, "####### seven"),
    ("#", LineKind.HEADING, ""),
    ("slide 1: lowercase", LineKind.PLAIN_TEXT, "slide 1: lowercase"),
    ("**bold** start", LineKind.PLAIN_TEXT, "**bold** start"),
])
def test_classify_line(line, kind, text):
    classified = classify_line(line)
    assert classified.kind is kind
    assert classified.text == text


# --- state machine ---

def test_step_ignores_text_before_first_slide():
    assert step(INITIAL_STATE, "orphan prose") == INITIAL_STATE


def test_step_boundary_flushes_only_slides_with_content():
    state = step(INITIAL_STATE, "# Empty")
    state = step(state, "# Full")
    assert state.slides == ()
    state = step(state, "- item")
    state = step(state, "# Next")
    assert [s.title for s in state.slides] == ["Full"]
    assert state.current.title == "Next"


def test_finish_drops_trailing_empty_slide():
    state = step(step(INITIAL_STATE, "# A"), "- a")
    state = step(state, "# Trailing")
    assert [s.title for s in finish(state)] == ["A"]


# --- parse_slides ---

def test_parse_headings_and_bullets():
    slides = parse_slides("# Intro\n- point one\n- point two\n\n## Details\n- point three")
    assert len(slides) == 2
    assert slides[0].title == "Intro"
    assert slides[0].content == ["point one", "point two"]
    assert slides[1].title == "Details"
    assert slides[1].content == ["point three"]


def test_parse_unstructured_text_gives_summary_slide():
    slides = parse_slides("just some prose with no structure")
    assert len(slides) == 1
    assert slides[0].title == FALLBACK_SLIDE_TITLE
    assert slides[0].content[-1] == "just some prose with no structure..."


def test_parse_summary_slide_excerpt_is_truncated():
    text = "x" * 250
    slides = parse_slides(text)
    assert slides[0].content[-1] == "x" * 100 + "..."
    assert len(slides[0].content) == 3


@pytest.mark.parametrize("text", ["", "   \n\n", "---\n```\n<!-- c -->", "# Only headings\n## Another"])
def test_parse_always_returns_a_slide(text):
    assert len(parse_slides(text)) >= 1


def test_parse_slide_markers():
    text = "Title Slide: Welcome\nA friendly intro\nSlide 2: Numbers\n- up 10%\nConclusion: Next steps\n- ship it"
    slides = parse_slides(text)
    assert [s.title for s in slides] == ["Welcome", "Numbers", "Conclusion Next steps"]
    assert slides[0].content == ["A friendly intro"]


def test_parse_filters_formatting_artifacts():
    text = "# Code\n```python\nprint('hi')\n```\n---\n<!-- _class: lead -->\nplain line"
    slides = parse_slides(text)
    assert slides[0].content == ["print('hi')", "plain line"]


def test_parse_notes_comment_sets_notes():
    slides = parse_slides("# Body\n- a\n<!-- Notes: say this -->")
    assert slides[0].content == ["a"]
    assert slides[0].notes == "say this"


def test_parse_plain_comment_is_not_notes():
    slides = parse_slides("# A\n- a\n<!-- say this -->\n<!-- _class: lead -->")
    assert slides[0].content == ["a"]
    assert slides[0].notes is None


def test_parse_consecutive_notes_comments_join_lines():
    slides = parse_slides("# B\n- b\n<!-- Notes: one -->\n<!-- Notes: two -->")
    assert slides[0].notes == "one\ntwo"


def test_parse_hashtag_line_stays_in_slide():
    slides = parse_slides("# Social\n#launch day\n- post it")
    assert len(slides) == 1
    assert slides[0].content == ["#launch day", "post it"]


def test_parse_leading_bullets_open_implicit_slide():
    slides = parse_slides("- early one\n- early two\n# Next\n- later")
    assert slides[0].title == IMPLICIT_SLIDE_TITLE
    assert slides[0].content == ["early one", "early two"]
    assert slides[1].title == "Next"


def test_parse_bare_heading_gets_placeholder_title():
    slides = parse_slides("#\n- item")
    assert slides[0].title == UNTITLED_SLIDE_TITLE


def test_parse_trims_lines():
    slides = parse_slides("   # Indented\n     -   spaced bullet   \n   text   ")
    assert slides[0].content == ["spaced bullet", "text"]


# --- resolve_title ---

def test_title_from_label():
    assert resolve_title("Title: Quarterly Review\n# Other", "source") == "Quarterly Review"


def test_title_from_presentation_title_label():
    assert resolve_title("intro line\n**Presentation Title:** Growth Plan", "") == "Growth Plan"


def test_title_from_first_line():
    assert resolve_title("\n\n## Market Overview\n- a", "") == "Market Overview"


def test_title_synthesized_from_source():
    assert resolve_title("", "one two three four five six seven") == "Presentation on one two three four five"


def test_title_with_empty_source():
    assert resolve_title("", "") == "Presentation on "


def test_title_empty_heading_falls_back_to_source():
    assert resolve_title("###\n- a", "Annual report 2024") == "Presentation on Annual report 2024"


# --- parse_presentation ---

def test_parse_presentation_full_reply():
    reply = (
        "Sure! Here is your deck:\n"
        "```md\n"
        "---\nmarp: true\ntheme: gaia\n---\n\n"
        "# Quarterly Review\n"
        "Results for Q3\n\n"
        "---\n\n"
        "## Revenue\n"
        "- Up 12%\n"
        "- New markets\n"
        "```\n"
    )
    presentation = parse_presentation(reply, "Q3 financial report")
    assert presentation.title == "Quarterly Review"
    assert [s.title for s in presentation.slides] == ["Quarterly Review", "Revenue"]
    assert presentation.slides[0].content == ["Results for Q3"]
    assert presentation.slides[1].content == ["Up 12%", "New markets"]


def test_parse_presentation_unstructured():
    presentation = parse_presentation("", "Some source document")
    assert len(presentation.slides) == 1
    assert presentation.title == "Presentation on Some source document"
