"""Tests for the resume-canvas command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from resume_canvas.cli import main

RESUME = {
    "firstName": "Jane",
    "lastName": "Doe",
    "experience": [{"company": "Acme", "position": "Engineer"}],
    "education": [{"institution": "UBC", "degree": "BSc"}],
    "projects": [{"name": "Canvas"}],
}


@pytest.fixture
def resume_file(tmp_path: Path) -> Path:
    path = tmp_path / "jane.json"
    path.write_text(json.dumps(RESUME), encoding="utf-8")
    return path


def test_paginate_prints_page_summary(resume_file: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["paginate", str(resume_file)]) == 0
    assert "Page 1: 1 experience, 1 education, 1 projects" in capsys.readouterr().out


def test_render_writes_tex_named_after_source(resume_file: Path, tmp_path: Path):
    out_dir = tmp_path / "out"

    assert main(["render", str(resume_file), "-o", str(out_dir), "-t", "red-accent"]) == 0

    tex = (out_dir / "jane.tex").read_text(encoding="utf-8")
    assert "JANE DOE" in tex


def test_missing_file_returns_error(tmp_path: Path):
    assert main(["paginate", str(tmp_path / "nope.json")]) == 1


def test_invalid_json_returns_error(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert main(["render", str(path), "-o", str(tmp_path)]) == 1


def test_zero_capacity_returns_error(resume_file: Path):
    assert main(["paginate", str(resume_file), "--projects-per-page", "0"]) == 1


def test_unknown_template_is_rejected_by_parser(resume_file: Path):
    with pytest.raises(SystemExit):
        main(["render", str(resume_file), "-t", "fancy"])
