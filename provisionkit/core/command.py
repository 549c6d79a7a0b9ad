"""
Command descriptors for external tool invocations.

A Command is pure data: a program, its arguments and an optional second
Command that receives this one's standard output. Engines build Commands and
the execution layer runs them.

Usage:
    from provisionkit.core.command import Command

    cmd = Command("tar", ("tzf", "archive.tar.gz"))
    piped = Command("7z", ("x", "a.tar.gz", "-so")).pipe(
        Command("7z", ("l", "-ttar", "-y", "-si"))
    )
"""

import shlex
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence


@dataclass(frozen=True)
class Command:
    """
    An executable invocation, optionally piped into another one.

    Attributes:
        program: Executable name or path (must be non-empty)
        args: Arguments passed to the program
        pipe_to: Command whose stdin receives this command's stdout
    """

    program: str
    args: Sequence[str] = ()
    pipe_to: Optional["Command"] = None

    def __post_init__(self):
        if not self.program:
            raise ValueError("Command program cannot be empty")
        # Freeze the argument list so callers cannot mutate it later
        object.__setattr__(self, "args", tuple(str(a) for a in self.args))

    @property
    def argv(self) -> List[str]:
        """Argument vector for this stage only."""
        return [self.program, *self.args]

    def pipe(self, other: "Command") -> "Command":
        """
        Return a new command chain with ``other`` appended at the end.

        Args:
            other: Command that consumes the output of the current chain

        Returns:
            New Command; neither operand is modified
        """
        if self.pipe_to is None:
            return Command(self.program, self.args, other)
        return Command(self.program, self.args, self.pipe_to.pipe(other))

    def stages(self) -> Iterator["Command"]:
        """Yield every command of the chain in execution order."""
        stage: Optional[Command] = self
        while stage is not None:
            yield stage
            stage = stage.pipe_to

    def __str__(self) -> str:
        return " | ".join(shlex.join(stage.argv) for stage in self.stages())
