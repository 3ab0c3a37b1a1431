"""
L4 Execution — side effects: registry installs and release downloads.

All child processes go through an ``adapters.ProcessRunner``.
"""

from monox_installer.core.services.binary_install.execution.fallback import (  # noqa: F401
    ensure_installed,
    install_command,
    remediation_steps,
    target_version,
)
from monox_installer.core.services.binary_install.execution.release_download import (  # noqa: F401
    build_release_asset,
    discover_latest_tag,
    download_commands,
    extract_tag,
    fetch_asset,
    follow_redirects,
    make_executable,
    pick_download_tool,
)
