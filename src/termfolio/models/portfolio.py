"""
Portfolio content models.

All records are frozen: the content tables are built once at import time
and shared read-only by every session.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Project(BaseModel):
    """A project entry on the Projects page."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    tech: str
    link: str

    @property
    def url(self) -> str:
        """Link with an ``https://`` scheme unless one is already present."""
        if self.link.startswith(("http://", "https://")):
            return self.link
        return f"https://{self.link}"


class Experience(BaseModel):
    """A position on the Experience page."""

    model_config = ConfigDict(frozen=True)

    role: str
    company: str
    period: str
    description: str


class ContactLink(BaseModel):
    """
    A line on the Contact page.

    Attributes:
        label: Left column, e.g. ``GitHub``.
        text: Text shown for the link.
        url: Link target (``https://...`` or ``mailto:...``).
    """

    model_config = ConfigDict(frozen=True)

    label: str
    text: str
    url: str


class Portfolio(BaseModel):
    """Everything a session can display."""

    model_config = ConfigDict(frozen=True)

    about: str
    projects: tuple[Project, ...] = ()
    experiences: tuple[Experience, ...] = ()
    contacts: tuple[ContactLink, ...] = ()
    contact_intro: str = "Feel free to reach out!"
