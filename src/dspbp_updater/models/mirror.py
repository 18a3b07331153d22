"""Mirror model for redirecting GitHub URLs to another host."""

from typing import Optional

from pydantic import BaseModel

GITHUB_PREFIX = "https://github.com/"


class Mirror(BaseModel):
    """A URL rewrite rule stored as ``url.<base_url>.insteadOf`` in git config."""

    label: str
    base_url: Optional[str] = None  # None means talk to GitHub directly
    instead_of: str = GITHUB_PREFIX

    model_config = {"frozen": True}

    @property
    def config_section(self) -> Optional[str]:
        """Git config section holding the rewrite, e.g. ``url "https://codeberg.org/"``."""
        if self.base_url is None:
            return None
        return f'url "{self.base_url}"'

    def rewrite(self, url: str) -> str:
        """Return the URL git will contact once this rule is active."""
        if self.base_url is None or not url.startswith(self.instead_of):
            return url
        return self.base_url + url[len(self.instead_of) :]


DIRECT = Mirror(label="GitHub (no mirror)")
CODEBERG = Mirror(label="Codeberg", base_url="https://codeberg.org/")

MIRRORS = (DIRECT, CODEBERG)
