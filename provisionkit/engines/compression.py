"""
Compression engines for gzipped tarballs.

7-Zip handles ``.tar.gz`` in two layers, so its commands pipe one 7z
invocation (gzip layer) into another (tar layer). Its listing carries
per-entry attributes. tar does everything in one call with a plainer
listing.
"""

import os
from typing import List

from provisionkit.core.command import Command
from provisionkit.engines.base import CompressionEngine, PathLike
from provisionkit.engines.listing import parse_7z_listing, parse_tar_listing


class SevenZipEngine(CompressionEngine):
    """Compression engine backed by 7z (on PATH or a bundled 7z.exe)."""

    def __init__(self, executable: str = "7z"):
        super().__init__("7z", executable)

    def unpack_command(self, tarball: PathLike, out_dir: PathLike) -> Command:
        exe = self.executable
        return Command(exe, ("x", str(tarball), "-y", "-so")).pipe(
            Command(exe, ("x", "-si", "-y", "-ttar", f"-o{out_dir}"))
        )

    def package_command(self, in_dir: PathLike, tarball: PathLike) -> Command:
        exe = self.executable
        members = os.path.join(".", str(in_dir), "*")
        return Command(exe, ("a", "-ttar", "-so", "a.tar", members)).pipe(
            Command(exe, ("a", "-si", str(tarball)))
        )

    def list_command(self, tarball: PathLike) -> Command:
        exe = self.executable
        return Command(exe, ("x", str(tarball), "-so")).pipe(
            Command(exe, ("l", "-ttar", "-y", "-si"))
        )

    def parse_listing(self, output: str) -> List[str]:
        return parse_7z_listing(output)


class TarEngine(CompressionEngine):
    """Compression engine backed by tar on PATH."""

    def __init__(self, executable: str = "tar"):
        super().__init__("tar", executable)

    def unpack_command(self, tarball: PathLike, out_dir: PathLike) -> Command:
        return Command(self.executable, ("xzf", str(tarball), f"--directory={out_dir}"))

    def package_command(self, in_dir: PathLike, tarball: PathLike) -> Command:
        return Command(self.executable, ("-czvf", str(tarball), "-C", str(in_dir), "."))

    def list_command(self, tarball: PathLike) -> Command:
        return Command(self.executable, ("tzf", str(tarball)))

    def parse_listing(self, output: str) -> List[str]:
        return parse_tar_listing(output)
