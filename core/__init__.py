# Android Device Toolkit Core Modules

from .adb_models import (
    Device, DeviceMode, DeviceInfo, FileEntry, FileType, DirectoryListing,
    ADBError, BinaryNotFoundError, CommandError, DeviceModeError,
    NoDeviceError, ValidationError, ConnectError
)
from .config import Settings
from .adb import ADBClient
from .manager import DeviceManager
from .platform import PlatformServices
from .utils import format_size
