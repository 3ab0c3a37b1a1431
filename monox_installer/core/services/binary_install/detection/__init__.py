"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ host and filesystem state but never WRITE.
"""

from monox_installer.core.services.binary_install.detection.manifest import (  # noqa: F401
    declared_version,
    find_package_root,
    read_manifest,
)
from monox_installer.core.services.binary_install.detection.package_manager import (  # noqa: F401
    PackageManagerInfo,
    detect_package_manager,
)
from monox_installer.core.services.binary_install.detection.platform import (  # noqa: F401
    lookup_package,
    lookup_release_triplet,
    normalize_platform,
    resolve_platform,
    supported_platforms,
)
