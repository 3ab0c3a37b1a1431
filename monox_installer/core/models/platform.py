"""
Platform models — the host identity and what it maps to.

A ``PlatformKey`` is derived once from host introspection. The static
tables in ``binary_install.data.platforms`` map it to a registry
package (``PlatformPackageEntry``) or to a release-asset triplet
(used to build a ``ReleaseAsset``).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformKey:
    """An (OS, CPU architecture) pair in Node's naming vocabulary.

    ``os`` follows ``process.platform`` (darwin, linux, win32, ...) and
    ``arch`` follows ``process.arch`` (x64, arm64, ia32, ...), because
    the platform packages are named after those values.
    """

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os} {self.arch}"

    @classmethod
    def parse(cls, value: str) -> PlatformKey:
        """Parse the ``"linux x64"`` (or ``"linux-x64"``) form."""
        parts = value.replace("-", " ").split()
        if len(parts) != 2:
            raise ValueError(f"Invalid platform key: {value!r}")
        return cls(os=parts[0].lower(), arch=parts[1].lower())

    def to_dict(self) -> dict[str, str]:
        return {"os": self.os, "arch": self.arch}


@dataclass(frozen=True)
class PlatformPackageEntry:
    """A platform package and the binary's path inside it."""

    package: str
    subpath: str

    @property
    def specifier(self) -> str:
        """The module specifier resolved by the locator (``pkg/subpath``)."""
        return f"{self.package}/{self.subpath}"


@dataclass(frozen=True)
class ReleaseAsset:
    """A release binary attached to a tagged release."""

    tag: str
    filename: str
    download_url: str

    @property
    def version(self) -> str:
        """The tag without its ``v`` prefix."""
        return self.tag[1:] if self.tag.startswith("v") else self.tag

    def to_dict(self) -> dict[str, str]:
        return {
            "tag": self.tag,
            "version": self.version,
            "filename": self.filename,
            "download_url": self.download_url,
        }
