"""
L2 Resolver — binary resolution.
"""

from monox_installer.core.services.binary_install.resolver.binary_locator import (  # noqa: F401
    locate,
    node_modules_paths,
)
