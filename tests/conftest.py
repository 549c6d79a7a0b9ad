"""
Pytest configuration and shared fixtures for ProvisionKit tests.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from provisionkit.core.command import Command
from provisionkit.core.config import (
    COMPRESSION_ENGINE_ENV,
    DOWNLOAD_ENGINE_ENV,
    TOOLS_DIR_ENV,
)
from provisionkit.core.execution import CommandResult
from provisionkit.engines.compression import TarEngine
from provisionkit.engines.download import CurlEngine
from provisionkit.engines.prober import EngineSet, reset_engines
from provisionkit.engines.shell import PosixShellEngine


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that need curl and tar on the host",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Test Doubles
# ============================================================================


class FakeRunner:
    """
    Stand-in for run_command that records every command it is given.

    A handler can inspect the command, touch the filesystem and return a
    CommandResult; if it returns None the default result is used.
    """

    def __init__(
        self,
        handler: Optional[Callable[[Command], Optional[CommandResult]]] = None,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
    ):
        self.handler = handler
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.commands: List[Command] = []
        self.calls: List[Dict] = []

    def __call__(self, command: Command, verbose: bool = False, timeout=None):
        self.commands.append(command)
        self.calls.append({"verbose": verbose, "timeout": timeout})
        if self.handler is not None:
            result = self.handler(command)
            if result is not None:
                return result
        return CommandResult([self.returncode], self.stdout, self.stderr)

    def commands_for(self, program: str) -> List[Command]:
        return [c for c in self.commands if c.program == program]


class FakeDownloads:
    """
    Handler simulating curl: each download writes the next payload.

    Records whether the destination already existed when each download ran.
    """

    def __init__(self, *payloads: bytes):
        self.payloads = list(payloads)
        self.destinations: List[Path] = []
        self.existed: List[bool] = []

    def __call__(self, command: Command) -> Optional[CommandResult]:
        if command.program != "curl":
            return None
        args = list(command.args)
        destination = Path(args[args.index("-o") + 1])
        self.destinations.append(destination)
        self.existed.append(destination.exists())
        destination.write_bytes(self.payloads.pop(0))
        return CommandResult([0])

    @property
    def count(self) -> int:
        return len(self.destinations)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_engines(monkeypatch):
    """Start every test with no active engines and no engine overrides."""
    for name in (DOWNLOAD_ENGINE_ENV, COMPRESSION_ENGINE_ENV, TOOLS_DIR_ENV):
        monkeypatch.delenv(name, raising=False)
    reset_engines()
    yield
    reset_engines()


@pytest.fixture
def engine_set() -> EngineSet:
    """Engine set built from curl, tar and sh without probing the host."""
    return EngineSet(
        download=CurlEngine(),
        compression=TarEngine(),
        shell=PosixShellEngine(),
    )


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner that succeeds for every command."""
    return FakeRunner()


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Factory for FakeRunner instances with a custom handler or result."""
    return FakeRunner


@pytest.fixture
def make_downloads() -> Callable[..., FakeDownloads]:
    """Factory for FakeDownloads handlers serving the given payloads."""
    return FakeDownloads
