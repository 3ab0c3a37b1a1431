"""
Installer configuration model — loaded from monox-install.yml.

Every field has a default, so a missing config file means
"install monox from the public registry and release host".
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ReleaseSource(BaseModel):
    """Where tagged releases (and their binary assets) are published."""

    host: str = "https://github.com"
    repo: str = "monoxon/monox"

    @property
    def repo_url(self) -> str:
        return f"{self.host.rstrip('/')}/{self.repo}"

    @property
    def latest_url(self) -> str:
        """URL that redirects to the newest release tag page."""
        return f"{self.repo_url}/releases/latest"


class InstallerConfig(BaseModel):
    """Root installer configuration."""

    binary_name: str = "monox"
    registry_client: str = "npm"      # command used for fallback installs
    family_scope: str = "@monox"      # scope of the sibling platform packages
    manifests_dir: str = "npm"        # generated package.json tree (release time)
    release: ReleaseSource = Field(default_factory=ReleaseSource)

    def family_names(self) -> set[str]:
        """Unscoped package names that belong to the family."""
        return {self.binary_name}
