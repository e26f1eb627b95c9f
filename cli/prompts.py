"""
CLI Platform Services Module
Terminal implementations of the host pickers, built on rich prompts.
"""

import os
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from core.platform import PlatformServices


class ConsolePlatformServices(PlatformServices):
    """Asks for paths on the terminal; an empty answer cancels."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _ask_path(self, label: str, default: str = "", must_exist: bool = True) -> Optional[str]:
        while True:
            answer = Prompt.ask(f"[bold cyan]{label}[/]", default=default, console=self.console)
            answer = (answer or "").strip()
            if not answer:
                return None

            path = os.path.expanduser(answer)
            if not must_exist or os.path.exists(path):
                return path

            self.console.print(f"[red]Path not found:[/] {path}")

    def select_apk_file(self) -> Optional[str]:
        return self._ask_path("APK file (*.apk)")

    def select_update_package(self) -> Optional[str]:
        return self._ask_path("Update package (*.zip)")

    def select_file_to_push(self) -> Optional[str]:
        return self._ask_path("File to push")

    def select_save_location(self, default_filename: str) -> Optional[str]:
        return self._ask_path("Save as", default=default_filename, must_exist=False)

    def select_directory(self) -> Optional[str]:
        return self._ask_path("Directory")
