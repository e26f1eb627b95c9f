"""Tests for device enumeration, mode detection and device operations."""

import pytest

from core.adb import ADBClient, parse_devices_output
from core.adb_models import (
    BinaryNotFoundError, CommandError, ConnectError, DeviceMode, DeviceModeError,
    NoDeviceError, ValidationError
)


ADB_DEVICES = ("adb", "devices")
FASTBOOT_DEVICES = ("fastboot", "devices")


@pytest.fixture
def client(fake_runner):
    return ADBClient(runner=fake_runner)


def test_parse_devices_skips_header_and_malformed_lines() -> None:
    output = (
        "List of devices attached\n"
        "emulator-5554\tdevice\n"
        "* daemon started successfully\n"
        "R58M123ABC\tunauthorized\n"
        "\n"
        "192.168.1.20:5555\toffline"
    )

    result = parse_devices_output(output)

    assert [(d.serial, d.status) for d in result.devices] == [
        ("emulator-5554", "device"),
        ("R58M123ABC", "unauthorized"),
        ("192.168.1.20:5555", "offline"),
    ]
    assert result.skipped == 1


def test_parse_devices_without_header() -> None:
    result = parse_devices_output("0123456789ABCDEF\tfastboot", skip_header=False)

    assert [d.serial for d in result.devices] == ["0123456789ABCDEF"]


def test_get_devices_empty_when_nothing_attached(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached"

    assert client.get_devices() == []


def test_get_devices_propagates_process_failure(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = BinaryNotFoundError("adb", "bin/adb", "/opt/app/bin/adb")

    with pytest.raises(BinaryNotFoundError):
        client.get_devices()


@pytest.mark.parametrize("status", ["device", "recovery", "sideload", " Device "])
def test_adb_statuses_win(client, fake_runner, status) -> None:
    fake_runner.responses[ADB_DEVICES] = f"List of devices attached\nABC\t{status.strip()}"

    mode, error = client.detect_device_mode()

    assert mode == DeviceMode.ADB
    assert error is None
    assert FASTBOOT_DEVICES not in fake_runner.calls


def test_adb_takes_precedence_over_fastboot(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached\nABC\tdevice"
    fake_runner.responses[FASTBOOT_DEVICES] = "XYZ\tfastboot"

    assert client.detect_device_mode() == (DeviceMode.ADB, None)


def test_fastboot_when_adb_has_no_usable_device(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached\nABC\tunauthorized"
    fake_runner.responses[FASTBOOT_DEVICES] = "XYZ\tfastboot"

    assert client.detect_device_mode() == (DeviceMode.FASTBOOT, None)


def test_fastboot_when_adb_fails(client, fake_runner, command_error) -> None:
    fake_runner.responses[ADB_DEVICES] = command_error()
    fake_runner.responses[FASTBOOT_DEVICES] = "XYZ\tfastboot"

    assert client.detect_device_mode() == (DeviceMode.FASTBOOT, None)


def test_no_device_is_unknown_without_error(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached"
    fake_runner.responses[FASTBOOT_DEVICES] = ""

    assert client.detect_device_mode() == (DeviceMode.UNKNOWN, None)
    assert client.get_device_mode() == "unknown"


def test_one_failure_and_no_device_is_unknown_without_error(client, fake_runner, command_error) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached"
    fake_runner.responses[FASTBOOT_DEVICES] = command_error()

    assert client.detect_device_mode() == (DeviceMode.UNKNOWN, None)


def test_both_failures_combine_errors(client, fake_runner, command_error) -> None:
    fake_runner.responses[ADB_DEVICES] = command_error(stderr="adb exploded")
    fake_runner.responses[FASTBOOT_DEVICES] = BinaryNotFoundError("fastboot", "bin/fastboot", "/x/bin/fastboot")

    mode, error = client.detect_device_mode()

    assert mode == DeviceMode.UNKNOWN
    assert isinstance(error, DeviceModeError)
    assert "adb exploded" in str(error)
    assert "fastboot" in str(error.fastboot_error)

    with pytest.raises(DeviceModeError):
        client.get_device_mode()


def test_reboot_in_adb_mode(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached\nABC\tdevice"
    fake_runner.responses[("adb", "reboot", "recovery")] = ""

    client.reboot("recovery")

    assert fake_runner.calls[-1] == ("adb", "reboot", "recovery")


def test_reboot_without_target(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached\nABC\tdevice"
    fake_runner.responses[("adb", "reboot")] = ""

    client.reboot("  ")

    assert fake_runner.calls[-1] == ("adb", "reboot")


def test_reboot_bootloader_in_fastboot_uses_dedicated_command(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached"
    fake_runner.responses[FASTBOOT_DEVICES] = "XYZ\tfastboot"
    fake_runner.responses[("fastboot", "reboot-bootloader")] = ""

    client.reboot("bootloader")

    assert fake_runner.calls[-1] == ("fastboot", "reboot-bootloader")
    assert ("fastboot", "reboot", "bootloader") not in fake_runner.calls


def test_reboot_other_target_in_fastboot(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached"
    fake_runner.responses[FASTBOOT_DEVICES] = "XYZ\tfastboot"
    fake_runner.responses[("fastboot", "reboot", "recovery")] = ""

    client.reboot("recovery")

    assert fake_runner.calls[-1] == ("fastboot", "reboot", "recovery")


def test_reboot_without_device(client, fake_runner) -> None:
    fake_runner.responses[ADB_DEVICES] = "List of devices attached"
    fake_runner.responses[FASTBOOT_DEVICES] = ""

    with pytest.raises(NoDeviceError):
        client.reboot()


def test_reboot_surfaces_detection_error(client, fake_runner, command_error) -> None:
    fake_runner.responses[ADB_DEVICES] = command_error()
    fake_runner.responses[FASTBOOT_DEVICES] = command_error()

    with pytest.raises(DeviceModeError):
        client.reboot()


def test_install_allows_reinstall(client, fake_runner) -> None:
    fake_runner.responses[("adb", "install", "-r", "/tmp/app.apk")] = "Success"

    assert client.install_package("/tmp/app.apk") == "Success"


def test_failed_operation_keeps_stderr(client, fake_runner, command_error) -> None:
    fake_runner.responses[("adb", "shell", "pm", "uninstall", "com.example")] = command_error(
        stderr="Failure [DELETE_FAILED_INTERNAL_ERROR]"
    )

    with pytest.raises(CommandError) as excinfo:
        client.uninstall_package("com.example")

    assert str(excinfo.value).startswith("failed to uninstall package:")
    assert "DELETE_FAILED_INTERNAL_ERROR" in str(excinfo.value)
    assert excinfo.value.stderr == "Failure [DELETE_FAILED_INTERNAL_ERROR]"


def test_sideload_rejects_empty_path_before_running(client, fake_runner) -> None:
    with pytest.raises(ValidationError):
        client.sideload_package("   ")

    assert fake_runner.calls == []


def test_sideload(client, fake_runner) -> None:
    fake_runner.responses[("adb", "sideload", "/tmp/update.zip")] = "Total xfer: 1.00x"

    assert client.sideload_package(" /tmp/update.zip ") == "Total xfer: 1.00x"


def test_push_and_pull(client, fake_runner) -> None:
    fake_runner.responses[("adb", "push", "a.txt", "/sdcard/a.txt")] = "1 file pushed"
    fake_runner.responses[("adb", "pull", "-a", "/sdcard/DCIM", "/tmp")] = "12 files pulled"

    assert client.push_file("a.txt", "/sdcard/a.txt") == "1 file pushed"
    assert client.pull_file("/sdcard/DCIM", "/tmp") == "12 files pulled"


def test_list_files(client, fake_runner) -> None:
    fake_runner.responses[("adb", "shell", "ls", "-lA", "/sdcard")] = (
        "total 8\n"
        "drwxrwx--x 2 root sdcard_rw 3452 2024-02-01 08:05 DCIM\n"
        "garbage\n"
    )

    listing = client.list_files("/sdcard")

    assert [e.name for e in listing] == ["DCIM"]
    assert listing.skipped == 1


def test_enable_wireless_default_port(client, fake_runner) -> None:
    fake_runner.responses[("adb", "tcpip", "5555")] = "restarting in TCP mode port: 5555"

    assert client.enable_wireless() == "restarting in TCP mode port: 5555"


def test_connect_requires_ip(client, fake_runner) -> None:
    with pytest.raises(ValidationError):
        client.connect_wireless("")

    assert fake_runner.calls == []


@pytest.mark.parametrize("output", [
    "connected to 192.168.1.20:5555",
    "already connected to 192.168.1.20:5555",
])
def test_connect_success(client, fake_runner, output) -> None:
    fake_runner.responses[("adb", "connect", "192.168.1.20:5555")] = output

    assert client.connect_wireless("192.168.1.20") == output


def test_connect_reports_adb_message(client, fake_runner) -> None:
    fake_runner.responses[("adb", "connect", "192.168.1.20:5037")] = (
        "failed to connect to '192.168.1.20:5037': Connection refused"
    )

    with pytest.raises(ConnectError, match="Connection refused"):
        client.connect_wireless("192.168.1.20", "5037")


def test_connect_empty_output_means_no_device(client, fake_runner, command_error) -> None:
    fake_runner.responses[("adb", "connect", "192.168.1.20:5555")] = command_error()

    with pytest.raises(ConnectError, match="No device found"):
        client.connect_wireless("192.168.1.20")


def test_disconnect_retries_with_bare_ip(client, fake_runner, command_error) -> None:
    fake_runner.responses[("adb", "disconnect", "192.168.1.20:5555")] = command_error()
    fake_runner.responses[("adb", "disconnect", "192.168.1.20")] = ""

    assert client.disconnect_wireless("192.168.1.20") == "Disconnected from 192.168.1.20:5555"


def test_run_shell(client, fake_runner) -> None:
    fake_runner.responses[("adb", "shell", "echo hi")] = "hi"

    assert client.run_shell("echo hi") == "hi"
