from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Skill(BaseModel):
    name: str
    level: int = 0

    @field_validator("level", mode="before")
    @classmethod
    def _clamp_level(cls, value):
        try:
            level = int(value)
        except (TypeError, ValueError):
            return 0
        return min(max(level, 0), 100)


class Project(BaseModel):
    title: str
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    link: Optional[str] = None
    image: Optional[str] = None


class Portfolio(BaseModel):
    """Landing page content: about text, skill bars, projects and contact."""

    tagline: str = ""
    about: List[str] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    email: Optional[str] = None
    location: Optional[str] = None
    resume: Optional[str] = None

    @field_validator("about", "skills", "projects", mode="before")
    @classmethod
    def _tolerate_null(cls, value):
        return [] if value is None else value
