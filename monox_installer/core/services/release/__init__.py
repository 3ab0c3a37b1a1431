"""
Release-time helpers — run while preparing a release, never at install time.
"""

from monox_installer.core.services.release.version_sync import (  # noqa: F401
    SyncReport,
    find_manifests,
    read_build_version,
    sync_versions,
    update_manifest,
)
