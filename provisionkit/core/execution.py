"""
Process execution for generated commands.

Runs a Command (including piped chains) as external processes and reports
the outcome. This module never interprets tool output; it only collects it
so callers can log it or hand it to a listing parser.
"""

import logging
import subprocess
import tempfile
from dataclasses import dataclass
from typing import List, Optional

from provisionkit.core.command import Command

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """
    Outcome of running a command chain.

    Attributes:
        returncodes: Exit code of every stage, in chain order
        stdout: Standard output of the last stage
        stderr: Combined standard error of all stages
    """

    returncodes: List[int]
    stdout: str = ""
    stderr: str = ""

    @property
    def returncode(self) -> int:
        """First non-zero exit code of the chain, or 0."""
        for code in self.returncodes:
            if code != 0:
                return code
        return 0

    @property
    def success(self) -> bool:
        """True only if every stage exited with status 0."""
        return self.returncode == 0


def run_command(
    command: Command, verbose: bool = False, timeout: Optional[float] = None
) -> CommandResult:
    """
    Run a command chain and wait for it to finish.

    Args:
        command: Command to run; piped stages are connected stdout -> stdin
        verbose: Log collected output at INFO instead of DEBUG
        timeout: Seconds to wait before killing the chain (None waits forever)

    Returns:
        CommandResult for the chain

    Raises:
        OSError: If a program cannot be started
        subprocess.TimeoutExpired: If the timeout elapses
    """
    log_level = logging.INFO if verbose else logging.DEBUG
    logger.log(log_level, f"Running: {command}")

    processes: List[subprocess.Popen] = []
    with tempfile.TemporaryFile() as stderr_file:
        try:
            stdin = None
            stages = list(command.stages())
            for index, stage in enumerate(stages):
                is_last = index == len(stages) - 1
                proc = subprocess.Popen(
                    stage.argv,
                    stdin=stdin,
                    stdout=subprocess.PIPE,
                    stderr=stderr_file,
                )
                # Let the previous stage receive SIGPIPE if this one exits early
                if stdin is not None:
                    stdin.close()
                processes.append(proc)
                if not is_last:
                    stdin = proc.stdout

            stdout, _ = processes[-1].communicate(timeout=timeout)
            for proc in processes[:-1]:
                proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_all(processes)
            raise
        except OSError:
            _kill_all(processes)
            raise

        stderr_file.seek(0)
        stderr = stderr_file.read().decode("utf-8", errors="replace")

    result = CommandResult(
        returncodes=[proc.returncode for proc in processes],
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr,
    )

    for line in (result.stdout + result.stderr).splitlines():
        if line.strip():
            logger.log(log_level, f"  {line}")
    if not result.success:
        logger.debug(f"Command exited with status {result.returncodes}: {command}")

    return result


def probe_command(command: Command, timeout: Optional[float] = None) -> bool:
    """
    Check whether a command runs successfully.

    Output is discarded. Any failure to start, non-zero exit or timeout
    counts as a failed probe.

    Args:
        command: Probe command (piping is ignored)
        timeout: Optional timeout in seconds

    Returns:
        True if the command exited with status 0, False otherwise
    """
    try:
        result = subprocess.run(
            command.argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Probe of {command.program} failed to run: {e}")
        return False

    return result.returncode == 0


def _kill_all(processes: List[subprocess.Popen]) -> None:
    for proc in processes:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
