"""
Platform Services Module
File and directory pickers supplied by the hosting front end.

The core never reaches for a global application handle; whoever builds a
DeviceManager passes in the PlatformServices implementation to use.
"""

from typing import Optional


class PlatformServices:
    """
    Interface for host-provided pickers.

    Every method returns the chosen path, or None if the user cancelled.
    """

    def select_apk_file(self) -> Optional[str]:
        raise NotImplementedError

    def select_update_package(self) -> Optional[str]:
        """Pick a .zip update package for sideloading."""
        raise NotImplementedError

    def select_file_to_push(self) -> Optional[str]:
        raise NotImplementedError

    def select_save_location(self, default_filename: str) -> Optional[str]:
        raise NotImplementedError

    def select_directory(self) -> Optional[str]:
        raise NotImplementedError


class StaticPlatformServices(PlatformServices):
    """Answers every picker with preset paths; for scripting and tests."""

    def __init__(
        self,
        apk_file: Optional[str] = None,
        update_package: Optional[str] = None,
        file_to_push: Optional[str] = None,
        save_location: Optional[str] = None,
        directory: Optional[str] = None,
    ):
        self.apk_file = apk_file
        self.update_package = update_package
        self.file_to_push = file_to_push
        self.save_location = save_location
        self.directory = directory

    def select_apk_file(self) -> Optional[str]:
        return self.apk_file

    def select_update_package(self) -> Optional[str]:
        return self.update_package

    def select_file_to_push(self) -> Optional[str]:
        return self.file_to_push

    def select_save_location(self, default_filename: str) -> Optional[str]:
        return self.save_location

    def select_directory(self) -> Optional[str]:
        return self.directory
