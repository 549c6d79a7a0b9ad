"""
Command generators bound to the active engine set.

These functions build Commands using whatever engines ``probe_engines()``
selected. Calling any of them before a successful probe raises
EngineNotProbedError naming the function that was called.
"""

from typing import List

from provisionkit.core.command import Command
from provisionkit.engines.base import PathLike
from provisionkit.engines.prober import get_engine_set


def download_command(url: str, destination: PathLike) -> Command:
    """Command that downloads ``url`` to ``destination``, resuming if possible."""
    return get_engine_set("download_command").download.download_command(
        url, destination
    )


def unpack_command(tarball: PathLike, out_dir: PathLike) -> Command:
    """Command that unpacks ``tarball`` into ``out_dir``."""
    return get_engine_set("unpack_command").compression.unpack_command(
        tarball, out_dir
    )


def package_command(in_dir: PathLike, tarball: PathLike) -> Command:
    """Command that packages the contents of ``in_dir`` into ``tarball``."""
    return get_engine_set("package_command").compression.package_command(
        in_dir, tarball
    )


def list_archive_command(tarball: PathLike) -> Command:
    """Command that lists the files inside ``tarball``."""
    return get_engine_set("list_archive_command").compression.list_command(tarball)


def parse_archive_listing(output: str) -> List[str]:
    """Parse the output of list_archive_command() into member file paths."""
    return get_engine_set("parse_archive_listing").compression.parse_listing(output)


def shell_command(command_line: str) -> Command:
    """Command that runs ``command_line`` through the bound shell."""
    return get_engine_set("shell_command").shell.shell_command(command_line)
