"""
Shell engines.
"""

from provisionkit.core.command import Command
from provisionkit.engines.base import ShellEngine


class PosixShellEngine(ShellEngine):
    """The ``sh`` found on PATH."""

    def __init__(self, executable: str = "sh"):
        super().__init__("sh", executable)

    def shell_command(self, command_line: str) -> Command:
        return Command(self.executable, ("-c", command_line))


class BusyBoxShellEngine(ShellEngine):
    """The ``sh`` applet of a bundled busybox executable."""

    def __init__(self, executable: str):
        super().__init__("busybox", executable)

    def shell_command(self, command_line: str) -> Command:
        return Command(self.executable, ("sh", "-c", command_line))
