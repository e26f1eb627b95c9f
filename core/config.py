"""
Configuration Module
Binary names, remote commands and runtime settings for the transport layer.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


ADB_BINARY = "adb"
FASTBOOT_BINARY = "fastboot"

BIN_DIRNAME = "bin"

DEFAULT_WIRELESS_PORT = "5555"

# Statuses under which the bridge protocol answers commands
ADB_ACTIVE_STATUSES = frozenset({"device", "recovery", "sideload"})

# Device properties read for the info snapshot
PROP_MODEL = "ro.product.model"
PROP_ANDROID_VERSION = "ro.build.version.release"
PROP_BUILD_NUMBER = "ro.build.id"
PROP_CODENAME = "ro.product.device"
PROP_BRAND = "ro.product.brand"
PROP_WLAN_IP = "dhcp.wlan0.ipaddress"

# Remote shell commands
CMD_ROOT_CHECK = ["su", "-c", "id -u"]
CMD_WLAN_ADDR = ["ip", "addr", "show", "wlan0"]
CMD_MEMINFO = "cat /proc/meminfo | grep MemTotal"
CMD_STORAGE = "df /data"
CMD_BATTERY = "dumpsys battery | grep level"

NOT_ON_WIFI = "N/A (Not on WiFi?)"

DEFAULT_NICKNAME_FILE = Path.home() / ".adbkit" / "nicknames.json"


@dataclass
class Settings:
    """Runtime settings for resolving binaries and addressing a device."""
    bin_dirname: str = BIN_DIRNAME
    bin_dir: Optional[str] = None  # Explicit override, checked before the default layouts
    device_serial: Optional[str] = None
    wireless_port: str = DEFAULT_WIRELESS_PORT
    nickname_file: Path = field(default_factory=lambda: DEFAULT_NICKNAME_FILE)

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> 'Settings':
        """Build settings from ADBKIT_* environment variables."""
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get("ADBKIT_BIN_DIR"):
            settings.bin_dir = env["ADBKIT_BIN_DIR"]
        if env.get("ADBKIT_SERIAL"):
            settings.device_serial = env["ADBKIT_SERIAL"]
        if env.get("ADBKIT_NICKNAMES"):
            settings.nickname_file = Path(env["ADBKIT_NICKNAMES"]).expanduser()
        return settings
