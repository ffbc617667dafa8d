"""
Site owner profile.

Personalization shown in the hero section and navigation, read from the
environment with literal defaults. Read at call time so a changed .env or
test environment is picked up without re-importing.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class SiteProfile:
    """Display details for the blog owner."""
    name: str = "Ozzy"
    role: str = "Frontend Engineer"
    description: str = "I love crafting good UI/UX"
    avatar: str = "/static/avatar.svg"
    email: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    site_url: str = "http://localhost:5000"

    @property
    def site_name(self) -> str:
        return f"{self.name}'s Blog"

    @property
    def social_links(self) -> list[tuple[str, str]]:
        """(label, url) pairs for the links that are set."""
        links = [("GitHub", self.github), ("Twitter", self.twitter), ("LinkedIn", self.linkedin)]
        return [(label, url) for label, url in links if url]


def load_profile() -> SiteProfile:
    """Build the profile from USER_* environment variables."""
    defaults = SiteProfile()
    return SiteProfile(
        name=os.getenv("USER_NAME") or defaults.name,
        role=os.getenv("USER_ROLE") or defaults.role,
        description=os.getenv("USER_DESCRIPTION") or defaults.description,
        avatar=os.getenv("USER_AVATAR") or defaults.avatar,
        email=os.getenv("USER_EMAIL") or None,
        github=os.getenv("USER_GITHUB") or None,
        twitter=os.getenv("USER_TWITTER") or None,
        linkedin=os.getenv("USER_LINKEDIN") or None,
        site_url=os.getenv("SITE_URL") or defaults.site_url,
    )
