"""
Device Manager Module
Front-end facing entry point combining device operations with host pickers.
"""

import os
from typing import Optional

from .adb import ADBClient
from .adb_models import Device, DeviceInfo, DirectoryListing
from .config import Settings
from .nicknames import NicknameStore
from .platform import PlatformServices


class DeviceManager:
    """
    Everything a front end needs to manage one Android device.

    The platform services handle is injected so that pickers work the same
    way from a desktop shell, a terminal or a test.
    """

    def __init__(
        self,
        platform: PlatformServices,
        settings: Optional[Settings] = None,
        client: Optional[ADBClient] = None,
        nicknames: Optional[NicknameStore] = None,
    ):
        self.platform = platform
        self.settings = settings or Settings()
        self.client = client or ADBClient(settings=self.settings)
        self.nicknames = nicknames or NicknameStore(self.settings.nickname_file)

    def get_devices(self) -> list[Device]:
        return self.client.get_devices()

    def get_fastboot_devices(self) -> list[Device]:
        return self.client.get_fastboot_devices()

    def get_device_info(self) -> DeviceInfo:
        return self.client.get_device_info()

    def get_device_mode(self) -> str:
        return self.client.get_device_mode()

    def reboot(self, target: str = "") -> str:
        return self.client.reboot(target)

    def install_package(self, file_path: str) -> str:
        return self.client.install_package(file_path)

    def uninstall_package(self, package_name: str) -> str:
        return self.client.uninstall_package(package_name)

    def list_files(self, path: str) -> DirectoryListing:
        return self.client.list_files(path)

    def push_file(self, local_path: str, remote_path: str) -> str:
        return self.client.push_file(local_path, remote_path)

    def pull_file(self, remote_path: str, local_path: str) -> str:
        return self.client.pull_file(remote_path, local_path)

    def sideload_package(self, file_path: str) -> str:
        return self.client.sideload_package(file_path)

    def enable_wireless(self, port: str = "") -> str:
        return self.client.enable_wireless(port)

    def connect_wireless(self, ip_address: str, port: str = "") -> str:
        return self.client.connect_wireless(ip_address, port)

    def disconnect_wireless(self, ip_address: str, port: str = "") -> str:
        return self.client.disconnect_wireless(ip_address, port)

    def run_shell(self, command: str) -> str:
        return self.client.run_shell(command)

    def install_selected_package(self) -> Optional[str]:
        path = self.platform.select_apk_file()
        if not path:
            return None
        return self.install_package(path)

    def sideload_selected_package(self) -> Optional[str]:
        path = self.platform.select_update_package()
        if not path:
            return None
        return self.sideload_package(path)

    def push_selected_file(self, remote_dir: str) -> Optional[str]:
        """Push a picked local file into a remote directory."""
        local_path = self.platform.select_file_to_push()
        if not local_path:
            return None
        remote_path = f"{remote_dir.rstrip('/')}/{os.path.basename(local_path)}"
        return self.push_file(local_path, remote_path)

    def pull_to_selected_location(self, remote_path: str) -> Optional[str]:
        default_name = remote_path.rstrip('/').rsplit('/', 1)[-1]
        local_path = self.platform.select_save_location(default_name)
        if not local_path:
            return None
        return self.pull_file(remote_path, local_path)

    def get_nickname(self, serial: str) -> Optional[str]:
        return self.nicknames.get(serial)

    def set_nickname(self, serial: str, nickname: str):
        self.nicknames.set(serial, nickname)
