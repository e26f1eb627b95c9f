"""
Device Info Module
Reads individual device properties and metrics and assembles the info snapshot.

Each reader is best effort: a failed command or unexpected output degrades
that one field to "N/A" and never aborts the snapshot.
"""

import logging
import re
from typing import Optional

from .adb_models import ADBError, DeviceInfo, NOT_AVAILABLE
from .config import (
    ADB_BINARY, PROP_MODEL, PROP_ANDROID_VERSION, PROP_BUILD_NUMBER,
    PROP_CODENAME, PROP_BRAND, PROP_WLAN_IP, CMD_ROOT_CHECK, CMD_WLAN_ADDR,
    CMD_MEMINFO, CMD_STORAGE, CMD_BATTERY, NOT_ON_WIFI
)
from .executor import CommandRunner
from .utils import format_gb


logger = logging.getLogger(__name__)

IPV4_PATTERN = re.compile(r'inet (\d+\.\d+\.\d+\.\d+)/\d+')
MEMTOTAL_PATTERN = re.compile(r'MemTotal:\s*(\d+)\s*kB')
BATTERY_PATTERN = re.compile(r':\s*(\d+)')


def parse_ip_address(output: str) -> Optional[str]:
    """Extract the IPv4 address from `ip addr show` output."""
    match = IPV4_PATTERN.search(output)
    if match:
        return match.group(1)
    return None


def parse_ram_total(output: str) -> str:
    """Format the MemTotal line of /proc/meminfo, e.g. '7.8 GB'."""
    match = MEMTOTAL_PATTERN.search(output)
    if not match:
        return NOT_AVAILABLE
    try:
        kb = float(match.group(1))
    except ValueError:
        return NOT_AVAILABLE
    return format_gb(kb)


def parse_storage_info(output: str) -> str:
    """
    Format `df` output for a single filesystem as 'USED GB / TOTAL GB'.

    The second line holds the figures: filesystem, 1K-blocks, used,
    available, ...
    """
    lines = output.splitlines()
    if len(lines) < 2:
        return NOT_AVAILABLE

    fields = lines[1].split()
    if len(fields) < 4:
        return NOT_AVAILABLE

    try:
        total_kb = float(fields[1])
        used_kb = float(fields[2])
    except ValueError:
        return NOT_AVAILABLE

    return f"{format_gb(used_kb)} / {format_gb(total_kb)}"


def parse_battery_level(output: str) -> str:
    """Extract the battery percentage from `dumpsys battery` level line."""
    match = BATTERY_PATTERN.search(output)
    if not match:
        return NOT_AVAILABLE
    return f"{int(match.group(1), 10)}%"


def get_prop(runner: CommandRunner, prop: str) -> str:
    """Read a system property, or "N/A" if the lookup fails."""
    try:
        return runner.run(ADB_BINARY, "shell", "getprop", prop).strip()
    except ADBError as e:
        logger.debug("getprop %s failed: %s", prop, e)
        return NOT_AVAILABLE


def check_root_status(runner: CommandRunner) -> str:
    """Return "Yes" only when `su -c "id -u"` succeeds and prints 0."""
    try:
        output = runner.run(ADB_BINARY, "shell", *CMD_ROOT_CHECK)
    except ADBError as e:
        logger.debug("Root check failed: %s", e)
        return "No"
    return "Yes" if output.strip() == "0" else "No"


def get_ip_address(runner: CommandRunner) -> str:
    """WiFi address from wlan0, falling back to the DHCP property."""
    try:
        output = runner.run(ADB_BINARY, "shell", *CMD_WLAN_ADDR)
        ip = parse_ip_address(output)
        if ip:
            return ip
    except ADBError as e:
        logger.debug("Reading wlan0 address failed: %s", e)

    ip = get_prop(runner, PROP_WLAN_IP)
    if ip and ip != NOT_AVAILABLE:
        return ip

    return NOT_ON_WIFI


def _read_metric(runner: CommandRunner, command: str, parser) -> str:
    try:
        output = runner.run_shell(command)
    except ADBError as e:
        logger.debug("%r failed: %s", command, e)
        return NOT_AVAILABLE
    value = parser(output)
    if value == NOT_AVAILABLE:
        logger.debug("Could not parse output of %r: %r", command, output)
    return value


def get_ram_total(runner: CommandRunner) -> str:
    return _read_metric(runner, CMD_MEMINFO, parse_ram_total)


def get_storage_info(runner: CommandRunner) -> str:
    return _read_metric(runner, CMD_STORAGE, parse_storage_info)


def get_battery_level(runner: CommandRunner) -> str:
    return _read_metric(runner, CMD_BATTERY, parse_battery_level)


def get_device_info(runner: CommandRunner) -> DeviceInfo:
    """
    Assemble a fresh DeviceInfo snapshot.

    Args:
        runner: Command runner addressing the device.

    Returns:
        DeviceInfo with every field filled, degraded fields set to "N/A".
    """
    return DeviceInfo(
        model=get_prop(runner, PROP_MODEL),
        android_version=get_prop(runner, PROP_ANDROID_VERSION),
        build_number=get_prop(runner, PROP_BUILD_NUMBER),
        codename=get_prop(runner, PROP_CODENAME),
        brand=get_prop(runner, PROP_BRAND),
        ip_address=get_ip_address(runner),
        root_status=check_root_status(runner),
        ram_total=get_ram_total(runner),
        storage_info=get_storage_info(runner),
        battery_level=get_battery_level(runner),
    )
