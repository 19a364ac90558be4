"""Command-line entry point: run the API or render resume data."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from resume_canvas.services.pagination import PageCapacity, paginate
from resume_canvas.services.resume_generator import (
    generate_resume_pdf,
    generate_resume_tex,
    load_resume_document,
)
from resume_canvas.templates import list_templates

if TYPE_CHECKING:
    from resume_canvas.services.resume_data import ResumeDocument

logger = logging.getLogger(__name__)


def _add_capacity_arguments(parser: argparse.ArgumentParser) -> None:
    defaults = PageCapacity()
    parser.add_argument("--experience-per-page", type=int, default=defaults.experience)
    parser.add_argument("--education-per-page", type=int, default=defaults.education)
    parser.add_argument("--projects-per-page", type=int, default=defaults.projects)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-canvas",
        description="Resume canvas persistence API and paginated resume renderer.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the persistence API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")

    render = commands.add_parser("render", help="Render resume JSON to LaTeX (and PDF)")
    render.add_argument("source", type=Path, help="Path to a resume JSON file")
    render.add_argument("-o", "--output-dir", type=Path, default=Path("."))
    render.add_argument("-t", "--template", default="classic", choices=list_templates())
    render.add_argument("--pdf", action="store_true", help="Also compile a PDF")
    _add_capacity_arguments(render)

    summary = commands.add_parser("paginate", help="Print how entries are split across pages")
    summary.add_argument("source", type=Path, help="Path to a resume JSON file")
    _add_capacity_arguments(summary)

    return parser


def _capacity_from(args: argparse.Namespace) -> PageCapacity:
    return PageCapacity(
        experience=args.experience_per_page,
        education=args.education_per_page,
        projects=args.projects_per_page,
    )


def _load(path: Path) -> ResumeDocument:
    return load_resume_document(json.loads(path.read_text(encoding="utf-8")))


def _run_render(args: argparse.Namespace) -> int:
    document = _load(args.source)
    capacity = _capacity_from(args)
    stem = args.source.stem
    tex_path = generate_resume_tex(
        document, args.output_dir, args.template, capacity=capacity, stem=stem
    )
    print(f"LaTeX written to {tex_path}")
    if args.pdf:
        pdf_path = generate_resume_pdf(
            document, args.output_dir, args.template, capacity=capacity, stem=stem
        )
        if pdf_path is None:
            print("PDF compilation failed; see the log for details.", file=sys.stderr)
            return 1
        print(f"PDF written to {pdf_path}")
    return 0


def _run_paginate(args: argparse.Namespace) -> int:
    document = _load(args.source)
    capacity = _capacity_from(args)
    pages = paginate(document.experience, document.education, document.projects, capacity)
    for number, page in enumerate(pages, start=1):
        print(
            f"Page {number}: {len(page.experiences)} experience, "
            f"{len(page.education)} education, {len(page.projects)} projects"
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "serve":
            from resume_canvas.api.main import main as serve

            serve(args.host, args.port, reload=args.reload)
            return 0
        if args.command == "render":
            return _run_render(args)
        return _run_paginate(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.")
        return 130
    except (OSError, ValueError) as exc:
        # Covers unreadable files, malformed JSON and pydantic validation errors.
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
