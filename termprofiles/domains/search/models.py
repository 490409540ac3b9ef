"""
Search Models - Data types for the search domain.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from termprofiles.domains.profiles.models import Profile


class TermMatchMode(str, Enum):
    """How the scores of several search terms combine."""

    ALL = "all"  # every term must match
    ANY = "any"  # any matching term contributes
    LAST_TERM = "last_term"  # only the last term is scored


class ProfileQuery(BaseModel):
    """Search request: already-tokenized terms typed by the user."""

    terms: tuple[str, ...]
    match_mode: TermMatchMode = TermMatchMode.ALL

    model_config = {"frozen": True}

    @field_validator("terms")
    @classmethod
    def _drop_blank_terms(cls, terms: tuple[str, ...]) -> tuple[str, ...]:
        kept = tuple(term for term in terms if term.strip())
        if not kept:
            raise ValueError("at least one non-blank search term is required")
        return kept


class ProfileMatch(BaseModel):
    """A profile matched by a search, with its relevance weight."""

    profile: Profile
    weight: int = Field(..., gt=0)

    model_config = {"frozen": True}

    @property
    def identifier(self) -> str:
        return self.profile.identifier

    @property
    def name(self) -> str:
        return self.profile.name


class Icon(BaseModel):
    """Icon request handed to the host renderer."""

    name: str
    size: int = Field(..., gt=0)

    model_config = {"frozen": True}


class ResultMeta(BaseModel):
    """Display metadata for one search result."""

    id: str
    name: str
    create_icon: Callable[[int], Icon]
