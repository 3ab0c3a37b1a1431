"""
L0 Data — re-exports the static platform tables.
"""

from monox_installer.core.services.binary_install.data.platforms import (  # noqa: F401
    _ARCH_MAP,
    _OS_MAP,
    ASSET_FILENAME_TEMPLATE,
    ASSET_URL_TEMPLATE,
    DEFAULT_INSTALL_VERSION,
    DEPENDENCY_SECTIONS,
    PLATFORM_PACKAGES,
    RELEASE_TRIPLETS,
)
