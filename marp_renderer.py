import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)

MARP_CLI_COMMAND = os.getenv("MARP_CLI_COMMAND", "npx @marp-team/marp-cli")
MARP_TIMEOUT_SECONDS = float(os.getenv("MARP_TIMEOUT_SECONDS", "120"))

# Output format -> Marp CLI flag
FORMAT_FLAGS = {
    "pdf": "--pdf",
    "html": "--html",
}


class MarpRenderError(RuntimeError):
    """Raised when the Marp CLI fails to produce an output file."""


class SlideOutputFiles(NamedTuple):
    pdf_content: bytes
    html_content: bytes


def build_command(markdown_path: Path, theme: str, output_path: Path, fmt: str):
    return [
        *shlex.split(MARP_CLI_COMMAND),
        str(markdown_path),
        "--theme", theme,
        "--output", str(output_path),
        FORMAT_FLAGS[fmt],
    ]


def render(markdown: str, theme: str, fmt: str) -> bytes:
    """Renders Marp markdown to a PDF or HTML document and returns its bytes."""
    if fmt not in FORMAT_FLAGS:
        raise ValueError(f"Unsupported format '{fmt}'. Supported formats are: {', '.join(FORMAT_FLAGS)}")

    with tempfile.TemporaryDirectory(prefix="slide-creator-") as work_dir:
        markdown_path = Path(work_dir) / "slides.md"
        markdown_path.write_text(markdown, encoding="utf-8")
        output_path = Path(work_dir) / f"slides.{fmt}"

        cmd = build_command(markdown_path, theme, output_path, fmt)
        logger.info(f"Running Marp CLI: {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=MARP_TIMEOUT_SECONDS)
        except subprocess.CalledProcessError as e:
            logger.error(f"Marp CLI exited with status {e.returncode}: {e.stderr}", exc_info=True)
            raise MarpRenderError(f"Failed to create {fmt} presentation: {e.stderr or e}") from e
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error(f"Marp CLI could not be run: {e}", exc_info=True)
            raise MarpRenderError(f"Failed to create {fmt} presentation: {e}") from e

        if not output_path.exists():
            raise MarpRenderError(f"Marp CLI did not write {output_path.name}")
        return output_path.read_bytes()


def render_presentations(markdown: str, theme: str = "default") -> SlideOutputFiles:
    """Renders the same markdown as both PDF and HTML."""
    return SlideOutputFiles(
        pdf_content=render(markdown, theme, "pdf"),
        html_content=render(markdown, theme, "html"),
    )
