#!/usr/bin/env python3
"""
Android Device Toolkit - CLI Entry Point
"""

import argparse
import sys

from cli.app import run_cli


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adbkit",
        description="Android Device Toolkit - manage a device via adb and fastboot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s devices                    # List adb and fastboot devices
  %(prog)s info                       # Show a device info snapshot
  %(prog)s ls /sdcard                 # List a remote directory
  %(prog)s reboot bootloader          # Reboot into the bootloader
  %(prog)s connect 192.168.1.20       # Wireless adb on port 5555
        """
    )

    parser.add_argument('--bin-dir', type=str, help='Directory holding adb and fastboot')
    parser.add_argument('-s', '--serial', type=str, help='Serial of the device to address')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('-v', '--version', action='version', version='%(prog)s 1.0.0')

    subparsers = parser.add_subparsers(dest='command', required=True)

    for name, help_text in (
        ('devices', 'List connected devices'),
        ('info', 'Show device properties and metrics'),
        ('mode', 'Show whether the device is in adb or fastboot mode'),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('--json', action='store_true', help='Print JSON')

    reboot = subparsers.add_parser('reboot', help='Reboot the device')
    reboot.add_argument('target', nargs='?', default='', help='bootloader, recovery, sideload, ...')

    install = subparsers.add_parser('install', help='Install or reinstall an APK')
    install.add_argument('path', nargs='?', help='APK path (asked for when omitted)')

    uninstall = subparsers.add_parser('uninstall', help='Uninstall a package')
    uninstall.add_argument('package')

    ls = subparsers.add_parser('ls', help='List a remote directory')
    ls.add_argument('path', nargs='?', default='/sdcard')
    ls.add_argument('--json', action='store_true', help='Print JSON')

    push = subparsers.add_parser('push', help='Copy a local file to the device')
    push.add_argument('local')
    push.add_argument('remote')

    pull = subparsers.add_parser('pull', help='Copy a remote file or directory to this computer')
    pull.add_argument('remote')
    pull.add_argument('local', nargs='?', help='Destination (asked for when omitted)')

    sideload = subparsers.add_parser('sideload', help='Sideload an update package')
    sideload.add_argument('path', nargs='?', help='ZIP path (asked for when omitted)')

    tcpip = subparsers.add_parser('tcpip', help='Enable wireless adb on a USB device')
    tcpip.add_argument('--port', default='')

    for name, help_text in (('connect', 'Connect over wireless adb'), ('disconnect', 'Disconnect wireless adb')):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('ip')
        sub.add_argument('--port', default='')

    shell = subparsers.add_parser('shell', help='Run a shell command on the device')
    shell.add_argument('shell_command', nargs=argparse.REMAINDER)

    nickname = subparsers.add_parser('nickname', help='Show or set a device nickname')
    nickname.add_argument('serial')
    nickname.add_argument('name', nargs='?', help='New nickname ("" removes it)')

    return parser


def main():
    args = build_parser().parse_args()

    try:
        sys.exit(run_cli(args))
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        sys.exit(130)


if __name__ == '__main__':
    main()
