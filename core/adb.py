"""
ADB Wrapper Module
Handles all communication with Android devices via adb and fastboot.
"""

import logging
from typing import Optional

from .adb_models import (
    ADBError, CommandError, ConnectError, Device, DeviceInfo, DeviceList,
    DeviceMode, DeviceModeError, DirectoryListing, NoDeviceError, ValidationError
)
from .config import ADB_BINARY, FASTBOOT_BINARY, ADB_ACTIVE_STATUSES, Settings
from .device_info import get_device_info
from .executor import CommandRunner
from .listing import parse_ls_output


logger = logging.getLogger(__name__)


def parse_devices_output(output: str, skip_header: bool = True) -> DeviceList:
    """
    Parse `adb devices` / `fastboot devices` output.

    Only lines made of exactly two fields (serial, status) become devices;
    anything else is counted as skipped.

    Args:
        output: Raw command output.
        skip_header: Drop the first line ("List of devices attached").

    Returns:
        DeviceList with devices in output order.
    """
    result = DeviceList()
    lines = output.split('\n')
    if skip_header:
        lines = lines[1:]

    for line in lines:
        parts = line.split()
        if len(parts) == 2:
            result.devices.append(Device(serial=parts[0], status=parts[1]))
        elif parts:
            logger.debug("Skipping device line: %r", line)
            result.skipped += 1

    return result


def _require(value: str, message: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(message)
    return value


class ADBClient:
    """
    Device operations over adb and fastboot.

    Every method performs a fresh, blocking round trip to the external
    tools. Nothing is cached between calls.
    """

    def __init__(self, runner: Optional[CommandRunner] = None, settings: Optional[Settings] = None):
        if runner is None:
            runner = CommandRunner(settings)
        self.runner = runner
        self.settings = settings or runner.settings

    def _run_operation(self, description: str, name: str, *args: str) -> str:
        """Run a command, prefixing any failure with the operation name."""
        try:
            return self.runner.run(name, *args)
        except CommandError as e:
            raise CommandError(
                f"failed to {description}: {e}",
                command=e.command,
                returncode=e.returncode,
                stdout=e.stdout,
                stderr=e.stderr,
            ) from e

    def get_devices(self) -> list[Device]:
        """
        Get devices visible to adb.

        Returns:
            List of Device objects; empty when nothing is attached.

        Raises:
            ADBError: If adb cannot be run.
        """
        output = self.runner.run(ADB_BINARY, "devices")
        return parse_devices_output(output).devices

    def get_fastboot_devices(self) -> list[Device]:
        """Get devices visible to fastboot (its output has no header line)."""
        output = self.runner.run(FASTBOOT_BINARY, "devices")
        return parse_devices_output(output, skip_header=False).devices

    def detect_device_mode(self) -> tuple[DeviceMode, Optional[DeviceModeError]]:
        """
        Classify the connected device as adb, fastboot or unknown.

        adb wins whenever it reports a device, recovery or sideload entry,
        even if fastboot also lists something. Only when both enumerations
        fail is an error returned; no device at all is UNKNOWN without error.
        """
        adb_error: Optional[ADBError] = None
        try:
            for device in self.get_devices():
                if device.status.strip().lower() in ADB_ACTIVE_STATUSES:
                    return DeviceMode.ADB, None
        except ADBError as e:
            adb_error = e

        fastboot_error: Optional[ADBError] = None
        try:
            if self.get_fastboot_devices():
                return DeviceMode.FASTBOOT, None
        except ADBError as e:
            fastboot_error = e

        if adb_error is not None and fastboot_error is not None:
            return DeviceMode.UNKNOWN, DeviceModeError(adb_error, fastboot_error)

        return DeviceMode.UNKNOWN, None

    def get_device_mode(self) -> str:
        """
        Textual label of the current device mode.

        Raises:
            DeviceModeError: If neither transport could be queried.
        """
        mode, error = self.detect_device_mode()
        if error is not None:
            raise error
        return mode.value

    def get_device_info(self) -> DeviceInfo:
        return get_device_info(self.runner)

    def reboot(self, target: str = "") -> str:
        """
        Reboot the device, optionally into a target state.

        Args:
            target: "", "bootloader", "recovery", "sideload", ...

        Raises:
            DeviceModeError: If the mode could not be detected.
            NoDeviceError: If no device is connected.
        """
        mode, error = self.detect_device_mode()
        if error is not None:
            raise error

        target = (target or "").strip()

        if mode == DeviceMode.ADB:
            args = ["reboot"]
            if target:
                args.append(target)
            return self.runner.run(ADB_BINARY, *args)

        if mode == DeviceMode.FASTBOOT:
            if target == "bootloader":
                return self.runner.run(FASTBOOT_BINARY, "reboot-bootloader")
            args = ["reboot"]
            if target:
                args.append(target)
            return self.runner.run(FASTBOOT_BINARY, *args)

        raise NoDeviceError("no connected device detected in adb or fastboot mode")

    def install_package(self, file_path: str) -> str:
        """Install (or reinstall) an APK."""
        file_path = _require(file_path, "file path cannot be empty")
        return self._run_operation("install package", ADB_BINARY, "install", "-r", file_path)

    def uninstall_package(self, package_name: str) -> str:
        package_name = _require(package_name, "package name cannot be empty")
        return self._run_operation("uninstall package", ADB_BINARY, "shell", "pm", "uninstall", package_name)

    def sideload_package(self, file_path: str) -> str:
        """Send an update package to a device waiting in sideload mode."""
        file_path = _require(file_path, "file path cannot be empty")
        return self._run_operation("sideload package", ADB_BINARY, "sideload", file_path)

    def list_files(self, path: str) -> DirectoryListing:
        """
        List a remote directory.

        Args:
            path: Directory path on the device.

        Returns:
            DirectoryListing with entries in listing order.
        """
        output = self._run_operation("list files", ADB_BINARY, "shell", "ls", "-lA", path)
        listing = parse_ls_output(output)
        if listing.skipped:
            logger.debug("%d unreadable lines in listing of %s", listing.skipped, path)
        return listing

    def push_file(self, local_path: str, remote_path: str) -> str:
        return self._run_operation("push file", ADB_BINARY, "push", local_path, remote_path)

    def pull_file(self, remote_path: str, local_path: str) -> str:
        """Pull a file or directory, preserving timestamps and mode."""
        return self._run_operation("pull file", ADB_BINARY, "pull", "-a", remote_path, local_path)

    def run_shell(self, command: str) -> str:
        """Run an arbitrary shell command on the device."""
        command = _require(command, "shell command cannot be empty")
        return self.runner.run_shell(command)

    def enable_wireless(self, port: str = "") -> str:
        """Restart adbd on the USB-attached device in TCP/IP mode."""
        port = (port or "").strip() or self.settings.wireless_port
        return self._run_operation(
            "enable tcpip (is device connected via USB?)", ADB_BINARY, "tcpip", port
        )

    def connect_wireless(self, ip_address: str, port: str = "") -> str:
        """
        Connect to a device over TCP/IP.

        adb reports most connection failures on stdout with a zero exit
        status, so the outcome is judged from the text.

        Raises:
            ValidationError: If the IP address is empty.
            ConnectError: If adb did not report a connection.
        """
        ip_address = _require(ip_address, "IP address cannot be empty")
        port = (port or "").strip() or self.settings.wireless_port
        address = f"{ip_address}:{port}"

        try:
            output = self.runner.run(ADB_BINARY, "connect", address)
        except CommandError as e:
            logger.warning("adb connect %s failed: %s", address, e)
            output = e.stdout

        output = output.strip()
        if "connected to" in output or "already connected to" in output:
            return output

        if not output:
            raise ConnectError("failed to connect. No device found or IP is wrong")

        raise ConnectError(output)

    def disconnect_wireless(self, ip_address: str, port: str = "") -> str:
        """Disconnect a TCP/IP device, retrying with the bare IP if needed."""
        ip_address = _require(ip_address, "IP address cannot be empty")
        port = (port or "").strip() or self.settings.wireless_port
        address = f"{ip_address}:{port}"

        try:
            output = self.runner.run(ADB_BINARY, "disconnect", address)
        except CommandError:
            output = self._run_operation("disconnect", ADB_BINARY, "disconnect", ip_address)

        output = output.strip()
        if not output:
            return f"Disconnected from {address}"
        return output
