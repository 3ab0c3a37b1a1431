"""
L3 Detection — Host platform and table lookups.

``resolve_platform()`` never fails: it always produces a key, even for
hosts nobody ships binaries for. Unsupported hosts are rejected by the
table lookups, with a typed error instead of a bare ``KeyError``.
"""

from __future__ import annotations

import logging
import platform

from monox_installer.core.errors import UnsupportedPlatformError
from monox_installer.core.models.platform import PlatformKey, PlatformPackageEntry
from monox_installer.core.services.binary_install.data.platforms import (
    _ARCH_MAP,
    _OS_MAP,
    PLATFORM_PACKAGES,
    RELEASE_TRIPLETS,
)

logger = logging.getLogger(__name__)


def normalize_platform(system: str, machine: str) -> PlatformKey:
    """Map raw ``platform.system()`` / ``platform.machine()`` values to a key.

    Unknown values pass through lower-cased so the key still names
    the host in error messages.
    """
    sys_name = system.strip().lower()
    arch = machine.strip().lower()
    return PlatformKey(
        os=_OS_MAP.get(sys_name, sys_name),
        arch=_ARCH_MAP.get(arch, arch),
    )


def resolve_platform() -> PlatformKey:
    """Detect the current host's platform key."""
    key = normalize_platform(platform.system(), platform.machine())
    logger.debug("Host platform: %s (system=%s, machine=%s)",
                 key, platform.system(), platform.machine())
    return key


def supported_platforms() -> list[str]:
    """Platform keys with a registry package, as ``"os arch"`` strings."""
    return sorted(str(k) for k in PLATFORM_PACKAGES)


def lookup_package(key: PlatformKey) -> PlatformPackageEntry:
    """Return the registry package for ``key``.

    Raises:
        UnsupportedPlatformError: ``key`` has no entry. Fatal, there is
            no binary to fall back to.
    """
    entry = PLATFORM_PACKAGES.get(key)
    if entry is None:
        raise UnsupportedPlatformError(str(key), supported_platforms())
    return entry


def lookup_release_triplet(key: PlatformKey) -> str:
    """Return the release-asset target triplet for ``key``.

    Raises:
        UnsupportedPlatformError: no release asset is published for ``key``.
    """
    triplet = RELEASE_TRIPLETS.get(key)
    if triplet is None:
        raise UnsupportedPlatformError(
            str(key), sorted(str(k) for k in RELEASE_TRIPLETS),
        )
    return triplet
