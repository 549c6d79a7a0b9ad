"""
Download engines.

Each engine turns (url, destination) into a Command for one download tool.
Command-line downloaders continue partial files where the tool supports it.
"""

from provisionkit.core.command import Command
from provisionkit.engines.base import DownloadEngine, PathLike

WINDOWS_POWERSHELL_PATH = "C:\\Windows\\System32\\WindowsPowerShell\\v1.0\\powershell"


class CurlEngine(DownloadEngine):
    """Download with curl, resuming with ``-C -``."""

    def __init__(self, executable: str = "curl"):
        super().__init__("curl", executable)

    def download_command(self, url: str, destination: PathLike) -> Command:
        return Command(
            self.executable,
            ("-C", "-", "-#", "-f", "-o", str(destination), "-L", url),
        )


class WgetEngine(DownloadEngine):
    """Download with wget, resuming with ``-c``."""

    def __init__(self, executable: str = "wget"):
        super().__init__("wget", executable)

    def download_command(self, url: str, destination: PathLike) -> Command:
        return Command(self.executable, ("-c", "-O", str(destination), url))


class FetchEngine(DownloadEngine):
    """Download with BSD fetch, restarting interrupted transfers with ``-r``."""

    def __init__(self, executable: str = "fetch"):
        super().__init__("fetch", executable)

    def download_command(self, url: str, destination: PathLike) -> Command:
        return Command(self.executable, ("-r", "-o", str(destination), url))


class PowerShellEngine(DownloadEngine):
    """
    Download through a PowerShell WebClient script.

    WebClient cannot resume, so a partial file is always overwritten.
    """

    def __init__(self, executable: str = "powershell"):
        super().__init__("powershell", executable)

    @property
    def probe_command(self) -> Command:
        return Command(self.executable, ("-Help",))

    def download_command(self, url: str, destination: PathLike) -> Command:
        script = (
            "[System.Net.ServicePointManager]::SecurityProtocol = "
            "[System.Net.SecurityProtocolType]::Tls12; "
            "$webclient = (New-Object System.Net.Webclient); "
            f"$webclient.DownloadFile({_ps_quote(url)}, {_ps_quote(str(destination))})"
        )
        return Command(self.executable, ("-NoProfile", "-Command", script))


def _ps_quote(value: str) -> str:
    # Single-quoted PowerShell strings only need embedded quotes doubled
    return "'" + value.replace("'", "''") + "'"
