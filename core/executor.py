"""
Process Invoker Module
Runs adb/fastboot synchronously and normalizes the outcome.
"""

import logging
import subprocess
import sys
from typing import Optional

from .adb_models import CommandError
from .binaries import find_binary
from .config import Settings, ADB_BINARY


logger = logging.getLogger(__name__)


if sys.platform == "win32":
    def hidden_window_kwargs() -> dict:
        """Keyword arguments that keep a console window from flashing up."""
        startupinfo = subprocess.STARTUPINFO()
        startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW
        startupinfo.wShowWindow = subprocess.SW_HIDE
        return {
            'startupinfo': startupinfo,
            'creationflags': subprocess.CREATE_NO_WINDOW,
        }
else:
    def hidden_window_kwargs() -> dict:
        """No console windows to hide on this platform."""
        return {}


class CommandRunner:
    """
    Executes the control binaries.

    Every call resolves the binary afresh, blocks until the process exits
    and returns its stdout stripped of surrounding whitespace. There is no
    timeout: a hung device hangs the call.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def _build_command(self, name: str, args: tuple[str, ...]) -> list[str]:
        cmd = [find_binary(name, self.settings)]
        if self.settings.device_serial:
            cmd.extend(["-s", self.settings.device_serial])
        cmd.extend(args)
        return cmd

    def _execute(self, cmd: list[str], label: str) -> str:
        logger.debug("Running %s", cmd)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                **hidden_window_kwargs()
            )
        except OSError as e:
            raise CommandError(
                f"failed to run {label}: {e}",
                command=cmd,
            ) from e

        if result.returncode != 0:
            logger.debug("%s exited with status %d", label, result.returncode)
            raise CommandError(
                f"failed to run {label}: exit status {result.returncode} "
                f"(stderr: {result.stderr.strip()})",
                command=cmd,
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return result.stdout.strip()

    def run(self, name: str, *args: str) -> str:
        """
        Run a control binary with an argument list.

        Args:
            name: Logical binary name ("adb" or "fastboot").
            *args: Arguments passed to the binary.

        Returns:
            Trimmed stdout.

        Raises:
            BinaryNotFoundError: If the binary cannot be located.
            CommandError: On spawn failure or non-zero exit, with stderr attached.
        """
        cmd = self._build_command(name, args)
        return self._execute(cmd, name)

    def run_shell(self, command: str) -> str:
        """Run a single command string through ``adb shell``."""
        cmd = self._build_command(ADB_BINARY, ("shell", command))
        return self._execute(cmd, f"adb shell '{command}'")
