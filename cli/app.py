"""
CLI Application Module
Command-line interface for managing an Android device over adb/fastboot.
"""

import json
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
from rich.text import Text

from core.adb_models import ADBError, DeviceInfo, DirectoryListing, FileType
from core.config import Settings
from core.manager import DeviceManager
from core.platform import PlatformServices
from core.utils import format_size

from .prompts import ConsolePlatformServices


console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

TYPE_STYLES = {
    FileType.DIRECTORY: "bold blue",
    FileType.SYMLINK: "cyan",
    FileType.FILE: "",
}

INFO_LABELS = [
    ("model", "Model"),
    ("brand", "Brand"),
    ("codename", "Codename"),
    ("android_version", "Android"),
    ("build_number", "Build"),
    ("ip_address", "IP address"),
    ("root_status", "Root"),
    ("ram_total", "RAM"),
    ("storage_info", "Storage"),
    ("battery_level", "Battery"),
]


def setup_logging(verbose: bool = False):
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def print_json(data):
    console.print_json(json.dumps(data))


def human_size(size: str) -> str:
    """Render a byte count from a listing; leave anything else untouched."""
    if size.isdigit():
        return format_size(int(size))
    return size


def show_devices(manager: DeviceManager, as_json: bool = False):
    """Display devices seen by adb and fastboot."""
    rows = []
    for transport, fetch in (("adb", manager.get_devices), ("fastboot", manager.get_fastboot_devices)):
        try:
            for device in fetch():
                rows.append((transport, device))
        except ADBError as e:
            err_console.print(f"[yellow]WARNING:[/] {transport}: {escape(str(e))}")

    if as_json:
        print_json([
            {**device.to_dict(), 'transport': transport, 'nickname': manager.get_nickname(device.serial)}
            for transport, device in rows
        ])
        return

    if not rows:
        console.print("[yellow]No devices connected.[/]")
        console.print("  Make sure that:")
        console.print("  - the device is connected via USB")
        console.print("  - USB debugging is enabled")
        console.print("  - this computer has been authorized on the device")
        return

    table = Table(title="Connected Devices", show_header=True, header_style="bold magenta")
    table.add_column("Serial", style="cyan")
    table.add_column("Status")
    table.add_column("Transport", style="dim")
    table.add_column("Nickname", style="green")

    for transport, device in rows:
        table.add_row(device.serial, device.status, transport, escape(manager.get_nickname(device.serial) or ""))

    console.print(table)


def show_device_info(info: DeviceInfo, as_json: bool = False):
    if as_json:
        print_json(info.to_dict())
        return

    data = info.to_dict()
    summary = "\n".join(f"[bold cyan]{label}:[/] {data[key]}" for key, label in INFO_LABELS)
    console.print(Panel(summary, title="[bold]Device Info[/]", border_style="cyan"))


def show_listing(path: str, listing: DirectoryListing, as_json: bool = False):
    if as_json:
        print_json({
            'path': path,
            'entries': [entry.to_dict() for entry in listing],
            'skipped': listing.skipped,
        })
        return

    table = Table(title=path, show_header=True, header_style="bold magenta")
    table.add_column("Permissions", style="dim")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Name")

    for entry in listing:
        name = escape(entry.name) + ("/" if entry.is_directory else "")
        table.add_row(
            entry.permissions,
            human_size(entry.size),
            entry.date,
            entry.time,
            f"[{TYPE_STYLES[entry.type]}]{name}[/]" if TYPE_STYLES[entry.type] else name,
        )

    console.print(table)
    if listing.skipped:
        console.print(f"[dim]{listing.skipped} unreadable line(s) skipped[/]")


def print_output(output: Optional[str], done_message: str = "Done."):
    if output is None:
        console.print("[yellow]Cancelled.[/]")
    elif output:
        console.print(output, markup=False, highlight=False)
    else:
        console.print(f"[green][OK][/] {done_message}")


def dispatch(manager: DeviceManager, args) -> None:
    """Run the subcommand selected on the command line."""
    command = args.command

    if command == "devices":
        show_devices(manager, args.json)
    elif command == "info":
        show_device_info(manager.get_device_info(), args.json)
    elif command == "mode":
        mode = manager.get_device_mode()
        if args.json:
            print_json({'mode': mode})
        else:
            console.print(f"Device mode: [bold cyan]{mode}[/]")
    elif command == "reboot":
        print_output(manager.reboot(args.target or ""), "Reboot requested.")
    elif command == "install":
        if args.path:
            print_output(manager.install_package(args.path))
        else:
            print_output(manager.install_selected_package())
    elif command == "uninstall":
        print_output(manager.uninstall_package(args.package))
    elif command == "ls":
        show_listing(args.path, manager.list_files(args.path), args.json)
    elif command == "push":
        print_output(manager.push_file(args.local, args.remote))
    elif command == "pull":
        if args.local:
            print_output(manager.pull_file(args.remote, args.local))
        else:
            print_output(manager.pull_to_selected_location(args.remote))
    elif command == "sideload":
        if args.path:
            print_output(manager.sideload_package(args.path))
        else:
            print_output(manager.sideload_selected_package())
    elif command == "tcpip":
        print_output(manager.enable_wireless(args.port))
    elif command == "connect":
        print_output(manager.connect_wireless(args.ip, args.port))
    elif command == "disconnect":
        print_output(manager.disconnect_wireless(args.ip, args.port))
    elif command == "shell":
        print_output(manager.run_shell(" ".join(args.shell_command)), "")
    elif command == "nickname":
        if args.name is None:
            nickname = manager.get_nickname(args.serial)
            console.print(escape(nickname) if nickname else "[dim]No nickname set.[/]")
        else:
            manager.set_nickname(args.serial, args.name)
            console.print(f"[green][OK][/] Nickname for {args.serial} updated")
    else:
        raise ValueError(f"unknown command: {command}")


def run_cli(args, settings: Optional[Settings] = None, platform: Optional[PlatformServices] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Parsed command-line arguments.
        settings: Optional preset settings (defaults to the environment).
        platform: Optional picker implementation (defaults to terminal prompts).

    Returns:
        Process exit status.
    """
    setup_logging(getattr(args, 'verbose', False))

    settings = settings or Settings.from_env()
    if getattr(args, 'bin_dir', None):
        settings.bin_dir = args.bin_dir
    if getattr(args, 'serial', None):
        settings.device_serial = args.serial

    manager = DeviceManager(platform or ConsolePlatformServices(console), settings)

    try:
        dispatch(manager, args)
    except ADBError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(Text.assemble(("ERROR: ", "bold red"), (str(e), "red")))
        return 1

    return 0
