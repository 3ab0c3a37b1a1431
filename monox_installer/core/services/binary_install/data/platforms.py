"""
L0 Data — Platform tables and naming templates.

Pure data. No logic. The two tables are deliberately independent:
registry packages are named after Node's platform/arch values
(``@monox/linux-x64``) while release assets use Rust target triplets
(``monox-x86_64-unknown-linux-gnu``).
"""

from __future__ import annotations

from types import MappingProxyType

from monox_installer.core.models.platform import PlatformKey, PlatformPackageEntry

# Python's platform.system() (lower-cased) → Node's process.platform.
_OS_MAP: dict[str, str] = {
    "darwin": "darwin",
    "linux": "linux",
    "windows": "win32",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "sunos": "sunos",
    "aix": "aix",
}

# Python's platform.machine() (lower-cased) → Node's process.arch.
#
# Darwin reports arm64, Linux reports aarch64, Windows reports AMD64.
_ARCH_MAP: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "armv7l": "arm",
    "armv6l": "arm",
    "ppc64le": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
}

# Registry platform packages. The single source of truth for which
# hosts the npm distribution supports.
PLATFORM_PACKAGES: MappingProxyType[PlatformKey, PlatformPackageEntry] = MappingProxyType({
    PlatformKey("darwin", "arm64"): PlatformPackageEntry("@monox/darwin-arm64", "monox"),
    PlatformKey("darwin", "x64"): PlatformPackageEntry("@monox/darwin-x64", "monox"),
    PlatformKey("linux", "arm64"): PlatformPackageEntry("@monox/linux-arm64", "monox"),
    PlatformKey("linux", "x64"): PlatformPackageEntry("@monox/linux-x64", "monox"),
})

# Release-asset target triplets ({arch}-{vendor}-{os}).
RELEASE_TRIPLETS: MappingProxyType[PlatformKey, str] = MappingProxyType({
    PlatformKey("darwin", "arm64"): "aarch64-apple-darwin",
    PlatformKey("darwin", "x64"): "x86_64-apple-darwin",
    PlatformKey("linux", "arm64"): "aarch64-unknown-linux-gnu",
    PlatformKey("linux", "x64"): "x86_64-unknown-linux-gnu",
})

# Release asset naming.
ASSET_FILENAME_TEMPLATE = "{binary}-{triplet}"
ASSET_URL_TEMPLATE = "{repo_url}/releases/download/{tag}/{filename}"

# Version used for a fallback install when the wrapper declares no pin.
DEFAULT_INSTALL_VERSION = "latest"

# Dependency sections rewritten by the version syncer.
DEPENDENCY_SECTIONS: tuple[str, ...] = (
    "dependencies",
    "optionalDependencies",
    "devDependencies",
)
