"""
Verified transfer and unpack workflows.

This module provides the download -> verify -> retry -> unpack pipeline on
top of the bound engines:
- Downloads that continue partial files when the engine supports it
- Verification of existing files before any transfer
- One restart from scratch when a continued download fails verification
- Unpacking, packaging and listing of tarballs with uniform errors
- Scoped cleanup of temporary archives

Usage:
    from provisionkit.engines import probe_engines
    from provisionkit.transfer import ArchiveProvisioner

    provisioner = ArchiveProvisioner(probe_engines(), verbose=True)
    provisioner.download_verify_unpack(url, "sha256:...", Path("prefix"))
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from provisionkit.core.command import Command
from provisionkit.core.exceptions import (
    HashFormatError,
    IntegrityError,
    ListingError,
    PackageError,
    TransferError,
    UnpackError,
)
from provisionkit.core.execution import CommandResult, run_command
from provisionkit.core.filesystem import (
    ensure_directory,
    remove_file,
    temporary_directory,
)
from provisionkit.core.verification import validate_hash, verify_file
from provisionkit.engines.prober import EngineSet, get_engine_set

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
Runner = Callable[..., CommandResult]
Verifier = Callable[..., bool]

TEMP_ARCHIVE_NAME = "download.tar.gz"


class TransferState(Enum):
    """Where a verified transfer currently stands."""

    NOT_STARTED = "not_started"
    FETCHED = "fetched"
    VERIFIED = "verified"
    FAILED = "failed"


@dataclass
class TransferRecord:
    """
    State of one download_verify() call.

    Attributes:
        url: Source URL
        destination: Local file path
        expected_hash: Hash the file must match
        existed_beforehand: Whether destination was a file before the call
        state: Current TransferState
        fetch_count: Number of download commands run
        restarted: Whether the partial file was discarded and fetched anew
    """

    url: str
    destination: Path
    expected_hash: str
    existed_beforehand: bool
    state: TransferState = TransferState.NOT_STARTED
    fetch_count: int = 0
    restarted: bool = False


class ArchiveProvisioner:
    """
    Download, verify and unpack archives with the bound engines.

    Collaborators are injectable so the workflow can run against fake
    engines, runners and verifiers.

    Example:
        >>> provisioner = ArchiveProvisioner(engines)
        >>> provisioner.download_verify(url, expected, Path("pkg.tar.gz"))
        True
    """

    def __init__(
        self,
        engines: Optional[EngineSet] = None,
        runner: Runner = run_command,
        verifier: Verifier = verify_file,
        verbose: bool = False,
        timeout: Optional[float] = None,
    ):
        """
        Initialize provisioner.

        Args:
            engines: Engine set to use (the active set from probe_engines()
                is looked up on each call if None)
            runner: Runs a Command, returns a CommandResult
            verifier: Verifies (path, hash), raises IntegrityError on mismatch
            verbose: Log progress and tool output at INFO level
            timeout: Passed through to the runner for every command
        """
        self._engines = engines
        self.runner = runner
        self.verifier = verifier
        self.verbose = verbose
        self.timeout = timeout
        self.last_transfer: Optional[TransferRecord] = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _engine_set(self, entry_point: str) -> EngineSet:
        if self._engines is not None:
            return self._engines
        return get_engine_set(entry_point)

    def _info(self, message: str) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, message)

    def _run(self, command: Command) -> CommandResult:
        return self.runner(command, verbose=self.verbose, timeout=self.timeout)

    def _log_failure(self, result: CommandResult) -> None:
        logger.debug(f"Tool exited with status {result.returncode}")
        for line in result.stderr.splitlines():
            if line.strip():
                logger.debug(f"  {line}")

    def _fetch(self, record: TransferRecord) -> None:
        self.download(record.url, record.destination)
        record.fetch_count += 1
        record.state = TransferState.FETCHED

    def _check(self, record: TransferRecord) -> Optional[IntegrityError]:
        """Verify the record's file; return the failure instead of raising it."""
        try:
            verified = self.verifier(
                record.destination, record.expected_hash, verbose=self.verbose
            )
        except HashFormatError:
            record.state = TransferState.FAILED
            raise
        except IntegrityError as e:
            record.state = TransferState.FAILED
            return e

        if verified is False:
            record.state = TransferState.FAILED
            return IntegrityError(str(record.destination), record.expected_hash)

        record.state = TransferState.VERIFIED
        return None

    # ------------------------------------------------------------------
    # Transfer
    # ------------------------------------------------------------------

    def download(self, url: str, destination: PathLike) -> Path:
        """
        Download ``url`` to ``destination``, continuing a partial file if the
        engine and server support it.

        Returns:
            Path to the downloaded file

        Raises:
            TransferError: If the download process fails or cannot start
            EngineNotProbedError: If no engines are bound
        """
        destination = Path(destination)
        command = self._engine_set("download").download.download_command(
            url, destination
        )

        self._info(f"Downloading {url} to {destination}...")
        try:
            ensure_directory(destination.parent)
            result = self._run(command)
        except OSError as e:
            logger.debug(f"Could not run download command: {e}")
            raise TransferError(url, str(destination)) from e

        if not result.success:
            self._log_failure(result)
            raise TransferError(url, str(destination))

        return destination

    def download_verify(
        self,
        url: str,
        expected_hash: str,
        destination: PathLike,
        force: bool = False,
    ) -> bool:
        """
        Download ``url`` to ``destination`` and verify it against ``expected_hash``.

        An existing destination is verified first and kept if it matches.
        If it does not match, the integrity error is raised unless ``force``
        is set, in which case the file is downloaded again (continuing from
        what is on disk). When a download into a pre-existing file fails
        verification, the file is deleted and fetched once more from
        scratch. A fresh download that fails verification is never retried.

        Args:
            url: Source URL
            expected_hash: Expected hash, optionally "algorithm:hex"
            destination: Local file path
            force: Re-download an existing file that fails verification

        Returns:
            True once the file on disk matches the hash

        Raises:
            IntegrityError: If the final verification fails
            HashFormatError: If expected_hash is malformed; nothing is fetched
            TransferError: If a download process fails
        """
        destination = Path(destination)
        validate_hash(expected_hash, destination)
        record = TransferRecord(
            url=url,
            destination=destination,
            expected_hash=expected_hash,
            existed_beforehand=destination.is_file(),
        )
        self.last_transfer = record

        if record.existed_beforehand:
            self._info(f"Destination file {destination} already exists, verifying...")
            error = self._check(record)
            if error is None:
                return True
            if not force:
                raise error
            self._info("Verification failed, re-downloading...")

        while True:
            self._fetch(record)
            error = self._check(record)
            if error is None:
                return True

            # Only a continued download gets a second, from-scratch attempt
            if not record.existed_beforehand or record.restarted:
                raise error

            self._info(
                "Continued download did not verify, restarting from scratch..."
            )
            remove_file(destination)
            record.restarted = True

    # ------------------------------------------------------------------
    # Archives
    # ------------------------------------------------------------------

    def unpack(self, tarball: PathLike, destination: PathLike) -> Path:
        """
        Unpack ``tarball`` into ``destination``, creating it if needed.

        Raises:
            UnpackError: If the directory cannot be created or the unpack
                process fails; tool diagnostics only appear in the log
        """
        tarball = Path(tarball)
        destination = Path(destination)
        command = self._engine_set("unpack").compression.unpack_command(
            tarball, destination
        )

        self._info(f"Unpacking {tarball} into {destination}...")
        try:
            ensure_directory(destination)
            result = self._run(command)
        except OSError as e:
            logger.debug(f"Could not run unpack command: {e}")
            raise UnpackError(str(tarball), str(destination)) from e

        if not result.success:
            self._log_failure(result)
            raise UnpackError(str(tarball), str(destination))

        return destination

    def package(self, in_dir: PathLike, tarball: PathLike) -> Path:
        """
        Package the contents of ``in_dir`` into the gzipped tarball ``tarball``.

        Raises:
            PackageError: If the package process fails
        """
        in_dir = Path(in_dir)
        tarball = Path(tarball)
        command = self._engine_set("package").compression.package_command(
            in_dir, tarball
        )

        self._info(f"Packaging {in_dir} into {tarball}...")
        try:
            ensure_directory(tarball.parent)
            result = self._run(command)
        except OSError as e:
            raise PackageError(str(in_dir), str(tarball)) from e

        if not result.success:
            self._log_failure(result)
            raise PackageError(str(in_dir), str(tarball))

        return tarball

    def list_archive_files(self, tarball: PathLike) -> List[str]:
        """
        List the files (not directories) inside ``tarball``.

        Raises:
            ListingError: If the list process fails
            ListingParseError: If its output cannot be parsed
        """
        compression = self._engine_set("list_archive_files").compression
        command = compression.list_command(tarball)

        try:
            result = self._run(command)
        except OSError as e:
            raise ListingError(f"Could not list {tarball}") from e

        if not result.success:
            self._log_failure(result)
            raise ListingError(f"Could not list {tarball}")

        return compression.parse_listing(result.stdout)

    def download_verify_unpack(
        self, url: str, expected_hash: str, destination: PathLike
    ) -> Path:
        """
        Download a tarball to a temporary path, verify it and unpack it into
        ``destination``. The temporary archive is removed on every exit path.

        Raises:
            TransferError, IntegrityError, UnpackError
        """
        with temporary_directory(prefix="provisionkit_download_") as temp_dir:
            tarball = temp_dir / TEMP_ARCHIVE_NAME
            self.download_verify(url, expected_hash, tarball)
            return self.unpack(tarball, destination)


# ============================================================================
# Module-level API using the active engine set
# ============================================================================


def download(url: str, destination: PathLike, verbose: bool = False) -> Path:
    """Download with the active engines. See ArchiveProvisioner.download."""
    return ArchiveProvisioner(verbose=verbose).download(url, destination)


def download_verify(
    url: str,
    expected_hash: str,
    destination: PathLike,
    verbose: bool = False,
    force: bool = False,
) -> bool:
    """Download and verify with the active engines. See ArchiveProvisioner."""
    return ArchiveProvisioner(verbose=verbose).download_verify(
        url, expected_hash, destination, force=force
    )


def unpack(tarball: PathLike, destination: PathLike, verbose: bool = False) -> Path:
    """Unpack with the active engines. See ArchiveProvisioner.unpack."""
    return ArchiveProvisioner(verbose=verbose).unpack(tarball, destination)


def package(in_dir: PathLike, tarball: PathLike, verbose: bool = False) -> Path:
    """Package with the active engines. See ArchiveProvisioner.package."""
    return ArchiveProvisioner(verbose=verbose).package(in_dir, tarball)


def list_archive_files(tarball: PathLike, verbose: bool = False) -> List[str]:
    """List tarball members with the active engines."""
    return ArchiveProvisioner(verbose=verbose).list_archive_files(tarball)


def download_verify_unpack(
    url: str, expected_hash: str, destination: PathLike, verbose: bool = False
) -> Path:
    """Download, verify and unpack with the active engines."""
    return ArchiveProvisioner(verbose=verbose).download_verify_unpack(
        url, expected_hash, destination
    )
