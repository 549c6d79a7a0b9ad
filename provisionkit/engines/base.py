"""
Engine interfaces for ProvisionKit.

An engine wraps one external tool and generates Commands for its role.
Every engine carries a cheap probe Command that tells whether the tool is
present and working on this host.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from provisionkit.core.command import Command

PathLike = Union[str, Path]


class Engine(ABC):
    """
    Base class for all engines.

    Attributes:
        name: Name used to pin this engine through an override (e.g. 'curl')
        executable: Executable as invoked, either a bare name or a full path
    """

    def __init__(self, name: str, executable: str):
        self.name = name
        self.executable = executable

    @property
    def display_name(self) -> str:
        """Name shown to operators when probing fails."""
        return self.executable

    @property
    @abstractmethod
    def probe_command(self) -> Command:
        """Command that exits with status 0 when the tool is usable."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, executable={self.executable!r})"


class DownloadEngine(Engine):
    """Generates commands that fetch a URL into a local file."""

    @property
    def probe_command(self) -> Command:
        return Command(self.executable, ("--help",))

    @abstractmethod
    def download_command(self, url: str, destination: PathLike) -> Command:
        """
        Build a command that downloads ``url`` to ``destination``.

        Where the tool supports it, the command continues a partial file
        instead of starting over.
        """
        pass


class CompressionEngine(Engine):
    """
    Generates commands to unpack, package and list gzipped tarballs.

    All four operations live on one object so a candidate is always adopted
    as a whole.
    """

    @property
    def probe_command(self) -> Command:
        return Command(self.executable, ("--help",))

    @abstractmethod
    def unpack_command(self, tarball: PathLike, out_dir: PathLike) -> Command:
        """Build a command that extracts ``tarball`` into ``out_dir``."""
        pass

    @abstractmethod
    def package_command(self, in_dir: PathLike, tarball: PathLike) -> Command:
        """Build a command that packs the contents of ``in_dir`` into ``tarball``."""
        pass

    @abstractmethod
    def list_command(self, tarball: PathLike) -> Command:
        """Build a command that lists the members of ``tarball``."""
        pass

    @abstractmethod
    def parse_listing(self, output: str) -> List[str]:
        """Turn the output of ``list_command`` into member file paths."""
        pass


class ShellEngine(Engine):
    """Runs a command line through a POSIX-compatible shell."""

    @property
    def probe_command(self) -> Command:
        return self.shell_command("true")

    @abstractmethod
    def shell_command(self, command_line: str) -> Command:
        """Build a command that runs ``command_line`` in the shell."""
        pass
