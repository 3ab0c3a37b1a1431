"""
L3 Detection — Which registry client invoked us.

npm, pnpm, yarn and bun all export ``npm_config_user_agent`` to
lifecycle scripts, e.g. ``pnpm/8.15.1 npm/? node/v20.11.0 linux x64``.
The result is for diagnostics only; it never changes what gets
installed or how.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

USER_AGENT_ENV = "npm_config_user_agent"
EXECPATH_ENV = "npm_execpath"

KNOWN_MANAGERS = ("npm", "pnpm", "yarn", "bun")


@dataclass(frozen=True)
class PackageManagerInfo:
    """The detected registry client."""

    name: str = "unknown"
    version: str | None = None
    source: str = "none"    # user-agent, execpath, none

    @property
    def known(self) -> bool:
        return self.name != "unknown"

    def label(self) -> str:
        if self.version:
            return f"{self.name} {self.version}"
        return self.name

    def to_dict(self) -> dict:
        return {"name": self.name, "version": self.version, "source": self.source}


def detect_package_manager(environ: Mapping[str, str] | None = None) -> PackageManagerInfo:
    """Infer the invoking package manager from the environment.

    Checks the user agent first, then the executable path npm-style
    clients export. Returns ``PackageManagerInfo()`` (name ``unknown``)
    when neither is set, e.g. when run by hand.
    """
    env = os.environ if environ is None else environ

    agent = env.get(USER_AGENT_ENV, "").strip()
    if agent:
        first = agent.split()[0]
        name, _, version = first.partition("/")
        name = name.lower()
        if name in KNOWN_MANAGERS:
            return PackageManagerInfo(
                name=name,
                version=version if version and version != "?" else None,
                source="user-agent",
            )

    execpath = env.get(EXECPATH_ENV, "").strip()
    if execpath:
        exe = Path(execpath).name.lower()
        for name in ("pnpm", "yarn", "bun", "npm"):
            if name in exe:
                return PackageManagerInfo(name=name, source="execpath")

    return PackageManagerInfo()
