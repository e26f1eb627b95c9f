"""
Binary Resolver Module
Locates the bundled adb and fastboot executables.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .adb_models import BinaryNotFoundError
from .config import Settings


logger = logging.getLogger(__name__)


def executable_name(name: str, platform: Optional[str] = None) -> str:
    """Append the platform executable suffix to a tool name."""
    platform = platform or sys.platform
    if platform == "win32":
        return f"{name}.exe"
    return name


def get_executable_dir() -> Path:
    """Directory of the running program (frozen bundle or launched script)."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).resolve().parent
    return Path(sys.argv[0]).resolve().parent


def find_binary(name: str, settings: Optional[Settings] = None) -> str:
    """
    Resolve a control binary to an absolute path.

    Looks in <cwd>/bin first (development layout), then in the bin directory
    next to the running executable (installed layout). An explicit
    ``settings.bin_dir`` is checked before both.

    Args:
        name: Logical tool name, e.g. "adb" or "fastboot".
        settings: Optional runtime settings.

    Returns:
        Absolute path to an existing executable.

    Raises:
        BinaryNotFoundError: If neither location holds the binary.
    """
    settings = settings or Settings()
    filename = executable_name(name)

    override_path = None
    if settings.bin_dir:
        override_path = Path(settings.bin_dir).expanduser() / filename
        if override_path.is_file():
            return str(override_path.resolve())
        logger.warning("%s not found in configured bin dir %s", name, override_path.parent)

    dev_path = Path(".") / settings.bin_dirname / filename
    if dev_path.is_file():
        return str(dev_path.resolve())

    prod_path = get_executable_dir() / settings.bin_dirname / filename
    if prod_path.is_file():
        return str(prod_path)

    raise BinaryNotFoundError(
        name, str(dev_path), str(prod_path),
        str(override_path) if override_path else None,
    )
