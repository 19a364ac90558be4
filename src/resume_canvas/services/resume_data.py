"""Structured resume data consumed by the pagination engine.

Entries are immutable pydantic models. Field names are snake_case; the
camelCase keys used by the editing surface (``startDate``, ``type`` ...)
are accepted on input.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

__all__ = [
    "EducationEntry",
    "ExperienceEntry",
    "ProjectEntry",
    "ResumeDocument",
    "ResumeLink",
    "ResumeProfile",
]

_ENTRY_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _camel(snake: str, camel: str) -> AliasChoices:
    return AliasChoices(snake, camel)


class ExperienceEntry(BaseModel):
    """A single work-experience record."""

    model_config = _ENTRY_CONFIG

    company: str
    position: str
    employment_type: str = Field(
        default="", validation_alias=AliasChoices("employment_type", "employmentType", "type")
    )
    start_date: str = Field(default="", validation_alias=_camel("start_date", "startDate"))
    end_date: str = Field(default="", validation_alias=_camel("end_date", "endDate"))
    tasks: tuple[str, ...] = ()


class EducationEntry(BaseModel):
    """A single education record."""

    model_config = _ENTRY_CONFIG

    institution: str
    degree: str
    location: str = ""
    start_date: str = Field(default="", validation_alias=_camel("start_date", "startDate"))
    end_date: str = Field(default="", validation_alias=_camel("end_date", "endDate"))
    grade: str | None = None
    details: tuple[str, ...] = ()


class ProjectEntry(BaseModel):
    """A single portfolio project record."""

    model_config = _ENTRY_CONFIG

    name: str
    description: str = ""
    technologies: str = ""
    start_date: str = Field(default="", validation_alias=_camel("start_date", "startDate"))
    end_date: str = Field(default="", validation_alias=_camel("end_date", "endDate"))
    link: str | None = None


class ResumeLink(BaseModel):
    model_config = _ENTRY_CONFIG

    label: str
    url: str


class ResumeProfile(BaseModel):
    """Personal details shown in the first-page sidebar."""

    model_config = _ENTRY_CONFIG

    first_name: str = Field(default="", validation_alias=_camel("first_name", "firstName"))
    last_name: str = Field(default="", validation_alias=_camel("last_name", "lastName"))
    pronouns: str = ""
    title: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    skills: tuple[str, ...] = ()
    links: tuple[ResumeLink, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ResumeDocument(BaseModel):
    """Top-level bundle rendered by the paginated template."""

    model_config = _ENTRY_CONFIG

    profile: ResumeProfile = Field(default_factory=ResumeProfile)
    experience: tuple[ExperienceEntry, ...] = ()
    education: tuple[EducationEntry, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()
