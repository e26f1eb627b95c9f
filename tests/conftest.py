"""Pytest configuration: repo root on sys.path and a scripted command runner."""

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_root_str = str(_REPO_ROOT)
if _root_str not in sys.path:
    sys.path.insert(0, _root_str)

from core.adb_models import CommandError
from core.config import Settings


class FakeRunner:
    """Stands in for CommandRunner; answers from a table keyed by argv."""

    def __init__(self, responses=None):
        self.settings = Settings()
        self.responses = dict(responses or {})
        self.calls = []

    def _answer(self, key):
        self.calls.append(key)
        if key not in self.responses:
            raise CommandError(f"failed to run {key[0]}: exit status 1 (stderr: unexpected)",
                               command=list(key), returncode=1)
        value = self.responses[key]
        if isinstance(value, Exception):
            raise value
        return value

    def run(self, name, *args):
        return self._answer((name, *args))

    def run_shell(self, command):
        return self._answer(("adb", "shell", command))


@pytest.fixture
def fake_runner():
    return FakeRunner()


def command_error(message="exit status 1", stderr="", stdout=""):
    return CommandError(f"failed to run adb: {message} (stderr: {stderr})",
                        command=["adb"], returncode=1, stdout=stdout, stderr=stderr)


@pytest.fixture(name="command_error")
def command_error_factory():
    return command_error
