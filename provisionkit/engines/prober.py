"""
Engine probing and the active engine set.

``probe_engines()`` walks every role's candidates in priority order, runs
each candidate's probe command and binds the first one that works. The
result is an immutable EngineSet. It is also installed as the process-wide
active set so that the entry points in ``provisionkit.engines.commands``
and the default transfer workflow can use it.

Overrides restrict a role's search to one engine name. An override that
matches nothing is ignored with a ConfigurationWarning.

Usage:
    from provisionkit.engines.prober import probe_engines

    engines = probe_engines(verbose=True)
    cmd = engines.download.download_command(url, "out.tar.gz")
"""

import logging
import threading
import warnings
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from provisionkit.core.command import Command
from provisionkit.core.config import (
    COMPRESSION_ENGINE_ENV,
    DOWNLOAD_ENGINE_ENV,
    EngineOverrides,
    load_engine_overrides,
)
from provisionkit.core.exceptions import (
    ConfigurationWarning,
    EngineNotFoundError,
    EngineNotProbedError,
)
from provisionkit.core.execution import probe_command
from provisionkit.engines.base import (
    CompressionEngine,
    DownloadEngine,
    Engine,
    ShellEngine,
)
from provisionkit.engines.catalog import ROLES, EngineCatalog, build_catalog

logger = logging.getLogger(__name__)

Prober = Callable[[Command], bool]

_OVERRIDE_SOURCES = {
    "download": DOWNLOAD_ENGINE_ENV,
    "compression": COMPRESSION_ENGINE_ENV,
}


@dataclass(frozen=True)
class EngineSet:
    """
    One bound engine per role.

    Attributes:
        download: Engine used to fetch URLs
        compression: Engine used to unpack, package and list tarballs
        shell: Engine used to run shell command lines
    """

    download: DownloadEngine
    compression: CompressionEngine
    shell: ShellEngine

    def describe(self) -> Dict[str, str]:
        """Display name of the bound engine per role."""
        return {role: getattr(self, role).display_name for role in ROLES}


_active_engines: Optional[EngineSet] = None
_probe_lock = threading.Lock()


def restrict_candidates(
    role: str, candidates: Sequence[Engine], override: Optional[str]
) -> List[Engine]:
    """
    Apply an engine override to a candidate list.

    Args:
        role: Role name, used in the warning
        candidates: Candidates in priority order
        override: Engine name to restrict to, or None

    Returns:
        Candidates named ``override``, or all candidates when the override
        is unset or matches none of them
    """
    if not override:
        return list(candidates)

    matching = [c for c in candidates if c.name == override]
    if matching:
        logger.debug(f"Restricting {role} engines to '{override}'")
        return matching

    source = _OVERRIDE_SOURCES.get(role, f"{role} override")
    valid = ", ".join(dict.fromkeys(c.name for c in candidates))
    warnings.warn(
        f"Ignoring {source} as its value of '{override}' doesn't match any "
        f"known valid engines. Try one of {valid}.",
        ConfigurationWarning,
        stacklevel=3,
    )
    return list(candidates)


def select_engine(
    role: str,
    candidates: Sequence[Engine],
    prober: Prober = probe_command,
    verbose: bool = False,
) -> Tuple[Optional[Engine], List[str]]:
    """
    Find the first candidate whose probe succeeds.

    Args:
        role: Role name, used in log messages
        candidates: Candidates in priority order
        prober: Function running a probe command, True on success
        verbose: Log probing progress at INFO level

    Returns:
        (selected engine or None, display names of every candidate tried)
    """
    log_level = logging.INFO if verbose else logging.DEBUG
    logger.log(log_level, f"Probing for {role} engine...")

    attempted: List[str] = []
    for engine in candidates:
        attempted.append(engine.display_name)
        logger.log(log_level, f"Probing {engine.display_name} as a possibility...")
        try:
            found = prober(engine.probe_command)
        except Exception as e:
            # A probe that blows up is just an unavailable tool
            logger.debug(f"  Probe for {engine.display_name} raised: {e}")
            found = False

        if found:
            logger.log(log_level, f"Found {role} engine {engine.display_name}")
            return engine, attempted

    return None, attempted


def probe_engines(
    verbose: bool = False,
    *,
    catalog: Optional[EngineCatalog] = None,
    overrides: Optional[EngineOverrides] = None,
    prober: Prober = probe_command,
) -> EngineSet:
    """
    Search the host for a download, compression and shell engine.

    The resulting EngineSet is installed as the active set and returned.
    Probing again simply replaces the active set.

    Args:
        verbose: Log every candidate as it is probed
        catalog: Candidate engines (defaults to build_catalog())
        overrides: Pinned engine names (defaults to load_engine_overrides())
        prober: Function running a probe command, True on success

    Returns:
        EngineSet with one engine per role

    Raises:
        EngineNotFoundError: If any role has no working candidate. The
            message lists every candidate tried for each such role.
    """
    global _active_engines

    catalog = catalog if catalog is not None else build_catalog()
    overrides = overrides if overrides is not None else load_engine_overrides()

    selected: Dict[str, Engine] = {}
    missing: Dict[str, List[str]] = {}

    for role in ROLES:
        candidates = restrict_candidates(
            role, catalog.candidates(role), overrides.for_role(role)
        )
        engine, attempted = select_engine(role, candidates, prober, verbose)
        if engine is None:
            missing[role] = attempted
        else:
            selected[role] = engine

    if missing:
        raise EngineNotFoundError(missing)

    engines = EngineSet(
        download=selected["download"],
        compression=selected["compression"],
        shell=selected["shell"],
    )
    _active_engines = engines
    return engines


def ensure_engines(verbose: bool = False) -> EngineSet:
    """
    Return the active engine set, probing once if nothing is bound yet.

    Safe to call from several threads; only one of them probes.
    """
    engines = _active_engines
    if engines is not None:
        return engines

    with _probe_lock:
        if _active_engines is None:
            return probe_engines(verbose=verbose)
        return _active_engines


def get_engine_set(entry_point: str = "get_engine_set") -> EngineSet:
    """
    Get the active engine set without probing.

    Args:
        entry_point: Name reported in the error if nothing is bound

    Raises:
        EngineNotProbedError: If probe_engines() has not succeeded yet
    """
    engines = _active_engines
    if engines is None:
        raise EngineNotProbedError(entry_point)
    return engines


def set_engine_set(engines: Optional[EngineSet]) -> None:
    """Install an explicit engine set as the active one (None unbinds)."""
    global _active_engines
    _active_engines = engines


def reset_engines() -> None:
    """Unbind the active engine set."""
    set_engine_set(None)
