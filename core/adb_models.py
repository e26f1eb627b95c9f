"""
ADB Data Models Module
Data classes and exceptions shared by the device-transport layer.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional


NOT_AVAILABLE = "N/A"


class DeviceMode(Enum):
    """Transport a connected device is currently reachable through."""
    UNKNOWN = "unknown"
    ADB = "adb"
    FASTBOOT = "fastboot"


class FileType(Enum):
    """Kind of entry in a remote directory listing."""
    FILE = "File"
    DIRECTORY = "Directory"
    SYMLINK = "Symlink"

    @classmethod
    def from_permissions(cls, permissions: str) -> 'FileType':
        """Derive the entry type from the first character of a mode string."""
        if permissions.startswith('d'):
            return cls.DIRECTORY
        if permissions.startswith('l'):
            return cls.SYMLINK
        return cls.FILE


@dataclass
class Device:
    """Represents one entry of a transport's device enumeration."""
    serial: str
    status: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DeviceList:
    """Devices parsed from an enumeration, plus lines that did not parse."""
    devices: list[Device] = field(default_factory=list)
    skipped: int = 0


@dataclass
class DeviceInfo:
    """Point-in-time snapshot of device properties, pre-formatted for display."""
    model: str = NOT_AVAILABLE
    android_version: str = NOT_AVAILABLE
    build_number: str = NOT_AVAILABLE
    codename: str = NOT_AVAILABLE
    brand: str = NOT_AVAILABLE
    ip_address: str = NOT_AVAILABLE
    root_status: str = NOT_AVAILABLE
    ram_total: str = NOT_AVAILABLE
    storage_info: str = NOT_AVAILABLE
    battery_level: str = NOT_AVAILABLE

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FileEntry:
    """A single line of a remote long-format directory listing."""
    name: str
    type: FileType
    size: str
    permissions: str
    date: str
    time: str

    @property
    def is_directory(self) -> bool:
        return self.type == FileType.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.type == FileType.SYMLINK

    def to_dict(self) -> dict:
        data = asdict(self)
        data['type'] = self.type.value
        return data


@dataclass
class DirectoryListing:
    """Parsed listing: entries in input order and the number of rejected lines."""
    entries: list[FileEntry] = field(default_factory=list)
    skipped: int = 0

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class ADBError(Exception):
    """Exception raised for ADB-related errors."""
    pass


class BinaryNotFoundError(ADBError):
    """A control binary is missing from both the development and installed layouts."""

    def __init__(self, name: str, dev_path: str, prod_path: str, override_path: Optional[str] = None):
        self.name = name
        self.dev_path = dev_path
        self.prod_path = prod_path
        self.override_path = override_path
        message = f"binary '{name}' not found in dev path '{dev_path}' or prod path '{prod_path}'"
        if override_path:
            message = f"{message} (also checked configured path '{override_path}')"
        super().__init__(message)


class CommandError(ADBError):
    """An external command could not be spawned or exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        command: Optional[list[str]] = None,
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class DeviceModeError(ADBError):
    """Both transports failed to enumerate devices."""

    def __init__(self, adb_error: Exception, fastboot_error: Exception):
        self.adb_error = adb_error
        self.fastboot_error = fastboot_error
        super().__init__(
            f"failed to detect device mode: adb error: {adb_error}, "
            f"fastboot error: {fastboot_error}"
        )


class NoDeviceError(ADBError):
    """No device is connected in either adb or fastboot mode."""
    pass


class ValidationError(ADBError, ValueError):
    """A caller-supplied argument was rejected before running any command."""
    pass


class ConnectError(ADBError):
    """Wireless adb connect did not report a connection."""
    pass
