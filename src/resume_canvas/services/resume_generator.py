"""Resume generation service.

Turns structured resume data into a :class:`ResumeDocument` and renders it
with a registered paginated LaTeX template.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from resume_canvas.services.resume_data import ResumeDocument
from resume_canvas.templates import get_template

if TYPE_CHECKING:
    from resume_canvas.services.pagination import PageCapacity

logger = logging.getLogger(__name__)

__all__ = [
    "generate_resume_pdf",
    "generate_resume_tex",
    "load_resume_document",
]

_PROFILE_KEYS = (
    "first_name",
    "firstName",
    "last_name",
    "lastName",
    "pronouns",
    "title",
    "phone",
    "email",
    "address",
    "skills",
    "links",
)


def load_resume_document(raw: dict[str, Any]) -> ResumeDocument:
    """Build a :class:`ResumeDocument` from a JSON-like mapping.

    Accepts either ``{"profile": {...}, "experience": [...], ...}`` or the
    flat shape where the personal fields sit next to the entry lists.

    Raises:
        pydantic.ValidationError: If an entry is missing required fields.
    """
    if "profile" in raw:
        return ResumeDocument.model_validate(raw)

    profile = {key: raw[key] for key in _PROFILE_KEYS if key in raw}
    return ResumeDocument.model_validate(
        {
            "profile": profile,
            "experience": raw.get("experience", []),
            "education": raw.get("education", []),
            "projects": raw.get("projects", []),
        }
    )


def generate_resume_tex(
    document: ResumeDocument,
    output_dir: Path,
    template_name: str = "classic",
    *,
    capacity: PageCapacity | None = None,
    stem: str = "resume",
) -> Path:
    """Write the LaTeX source for *document* into *output_dir*.

    Returns:
        The ``Path`` of the written ``.tex`` file.
    """
    template = get_template(template_name)
    doc = template.build(document, capacity)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / f"{stem}.tex"
    target.write_text(doc.dumps(), encoding="utf-8")
    logger.info("Wrote resume source to %s", target)
    return target


def generate_resume_pdf(
    document: ResumeDocument,
    output_dir: Path,
    template_name: str = "classic",
    *,
    capacity: PageCapacity | None = None,
    stem: str = "resume",
    compiler: str = "pdflatex",
) -> Path | None:
    """Compile *document* to PDF via LaTeX.

    Requires *compiler* (``pdflatex`` or ``latexmk``) to be installed
    on the system.

    Returns:
        The ``Path`` of the generated ``.pdf``, or *None* if compilation
        failed.
    """
    template = get_template(template_name)
    doc = template.build(document, capacity)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / stem

    try:
        # PyLaTeX appends .pdf/.tex automatically
        doc.generate_pdf(str(target), clean_tex=False, compiler=compiler)
    except Exception:
        logger.exception("LaTeX compilation failed for %s", target)
        return None
    return Path(f"{target}.pdf")
