import subprocess
from pathlib import Path

import pytest

import marp_renderer
from marp_renderer import MarpRenderError, render, render_presentations


@pytest.fixture
def fake_marp(monkeypatch):
    """Replaces the Marp CLI with a stub that writes the flag name into the output file."""
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        markdown_path = Path(cmd[cmd.index("--theme") - 1])
        assert markdown_path.read_text(encoding="utf-8").startswith("---")
        output = Path(cmd[cmd.index("--output") + 1])
        output.write_bytes(cmd[-1].encode())
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(marp_renderer.subprocess, "run", fake_run)
    return calls


def test_render_pdf(fake_marp):
    assert render("---\nmarp: true\n---\n# X", "gaia", "pdf") == b"--pdf"
    cmd = fake_marp[0]
    assert cmd[cmd.index("--theme") + 1] == "gaia"
    assert cmd[-1] == "--pdf"


def test_render_presentations_returns_both_formats(fake_marp):
    files = render_presentations("---\n# X", "default")
    assert files.pdf_content == b"--pdf"
    assert files.html_content == b"--html"
    assert len(fake_marp) == 2


def test_render_cleans_up_work_dir(fake_marp):
    render("---\n# X", "default", "html")
    work_dir = Path(fake_marp[0][fake_marp[0].index("--output") + 1]).parent
    assert not work_dir.exists()


def test_render_rejects_unknown_format():
    with pytest.raises(ValueError):
        render("# X", "default", "docx")


def test_render_wraps_cli_failure(monkeypatch):
    def failing_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, stderr="theme not found")

    monkeypatch.setattr(marp_renderer.subprocess, "run", failing_run)
    with pytest.raises(MarpRenderError, match="theme not found"):
        render("# X", "nope", "pdf")


def test_render_wraps_missing_executable(monkeypatch):
    def missing(cmd, **kwargs):
        raise FileNotFoundError("npx")

    monkeypatch.setattr(marp_renderer.subprocess, "run", missing)
    with pytest.raises(MarpRenderError):
        render("# X", "default", "html")


def test_render_requires_output_file(monkeypatch):
    monkeypatch.setattr(
        marp_renderer.subprocess, "run", lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, "", "")
    )
    with pytest.raises(MarpRenderError, match="did not write"):
        render("# X", "default", "pdf")
