"""
Static portfolio content.

The logo and the default portfolio shown to every visitor.
"""

from __future__ import annotations

from termfolio.models.portfolio import ContactLink, Experience, Portfolio, Project

LOGO_LINES: tuple[str, ...] = (
    r"             __       __           __      ",
    r"            /\ \     /\ \         /\ \    ",
    r"            \ \ \   /  \ \       /  \ \   ",
    r"            /\ \_\ / /\ \ \     / /\ \ \  ",
    r"           / /\/_// / /\ \ \   / / /\ \_\ ",
    r"  __      / / /  / / /  \ \_\ / /_/_ \/_/ ",
    r" /\ \    / / /  / / /   / / // /____/\    ",
    r" \ \_\  / / /  / / /   / / // /\____\/    ",
    r" / / /_/ / /  / / /___/ / // / /______    ",
    r"/ / /__\/ /  / / /____\/ // / /_______\   ",
    r"\/_______/   \/_________/ \/__________/   ",
)

ABOUT = (
    "Hey, I'm Joe, a software developer interested in building "
    "entertaining or useful things.\n"
    "\n"
    "Currently exploring React Internals and distributed systems."
)

PROJECTS: tuple[Project, ...] = (
    Project(
        name="SSH Portfolio",
        description="This app",
        tech="Python, Rich, Paramiko",
        link="github.com/joe/ssh-portfolio",
    ),
    Project(
        name="React From Scratch",
        description="Built a toy React from scratch",
        tech="JavaScript",
        link="github.com/joe/react-0.5",
    ),
    Project(
        name="HTTP Server From Scratch",
        description="Build a HTTP server from scratch using TCP and HTTP/1.1",
        tech="Rust",
        link="github.com/joe/api-gateway",
    ),
)

EXPERIENCES: tuple[Experience, ...] = (
    Experience(
        role="Software Engineer",
        company="Microsoft",
        period="2025 - Present",
        description="Azure SQL VM team",
    ),
    Experience(
        role="Software Engineer Intern",
        company="Jenni AI",
        period="2024 - 2025",
        description="Developed new product that reviews manuscripts for Jenni AI",
    ),
    Experience(
        role="Software Engineer Intern",
        company="Blue Origin",
        period="Fall 2023",
        description="New Glenn Rocket Software",
    ),
)

CONTACTS: tuple[ContactLink, ...] = (
    ContactLink(
        label="GitHub",
        text="https://github.com/JoeS51",
        url="https://github.com/JoeS51",
    ),
    ContactLink(
        label="Email",
        text="joesluis51@gmail.com",
        url="mailto:joesluis51@gmail.com",
    ),
    ContactLink(
        label="LinkedIn",
        text="https://linkedin.com/in/joesluis/",
        url="https://linkedin.com/in/joesluis/",
    ),
)

DEFAULT_PORTFOLIO = Portfolio(
    about=ABOUT,
    projects=PROJECTS,
    experiences=EXPERIENCES,
    contacts=CONTACTS,
)


__all__ = [
    "LOGO_LINES",
    "ABOUT",
    "PROJECTS",
    "EXPERIENCES",
    "CONTACTS",
    "DEFAULT_PORTFOLIO",
]
