"""
Verified transfer workflows: download, verify, retry and unpack.
"""

from .provisioner import (
    ArchiveProvisioner,
    TransferRecord,
    TransferState,
    download,
    download_verify,
    download_verify_unpack,
    list_archive_files,
    package,
    unpack,
)

__all__ = [
    "ArchiveProvisioner",
    "TransferRecord",
    "TransferState",
    "download",
    "download_verify",
    "download_verify_unpack",
    "list_archive_files",
    "package",
    "unpack",
]
