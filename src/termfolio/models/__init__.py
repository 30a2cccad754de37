"""Content models for termfolio."""

from termfolio.models.portfolio import (
    ContactLink,
    Experience,
    Portfolio,
    Project,
)

__all__ = [
    "ContactLink",
    "Experience",
    "Portfolio",
    "Project",
]
