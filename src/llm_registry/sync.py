"""Synchronisation of the local registry copy from the remote source.

The sync downloads the remote document, checks that it is a well-formed
registry, replaces the local copy atomically while keeping its file
permissions, and reads the result back to confirm it was written intact.
The local file is left untouched if any step fails.
"""

import hashlib
import os
import stat
import tempfile
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .config_paths import ensure_user_data_dir_exists, get_sync_target_path, get_user_data_dir
from .document import RegistryDocument
from .errors import LLMRegistryError, SyncError
from .logging import LogEvent, log_debug, log_error, log_info
from .sources import DEFAULT_TIMEOUT, RemoteSource

# Mode given to a registry file that did not exist before the sync
DEFAULT_FILE_MODE = 0o644


class SyncStatus(Enum):
    """Status of a sync or update check."""

    UPDATED = "updated"
    ALREADY_CURRENT = "already_current"
    UPDATE_AVAILABLE = "update_available"
    ERROR = "error"


@dataclass
class SyncResult:
    """Result of a sync or update check."""

    success: bool
    status: SyncStatus
    message: str
    path: Optional[str] = None
    url: Optional[str] = None
    sha256: Optional[str] = None
    error: Optional[Exception] = None


def _sha256(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def _file_sha256(path: Path) -> Optional[str]:
    """Hash an existing file, or return None if there is no file."""
    if not path.is_file():
        return None
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(4096), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def _get_file_mode(path: Path) -> Optional[int]:
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    return None


def _prepare_directory(target: Path) -> None:
    if target.parent == get_user_data_dir():
        ensure_user_data_dir_exists()
    else:
        target.parent.mkdir(parents=True, exist_ok=True)


def _replace_file(target: Path, content: bytes) -> None:
    """Atomically replace ``target`` with ``content``, keeping its mode.

    Raises:
        OSError: If the file could not be written
    """
    original_mode = _get_file_mode(target)
    _prepare_directory(target)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        if original_mode is not None:
            os.chmod(tmp_path, original_mode)
        else:
            os.chmod(tmp_path, DEFAULT_FILE_MODE)

        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    log_info(LogEvent.REGISTRY_SYNC, "File replaced", path=str(target))
    if original_mode is not None:
        log_debug(LogEvent.REGISTRY_SYNC, "File permissions restored", path=str(target), mode=oct(original_mode))


def _verify_written(target: Path, content: bytes) -> None:
    if target.read_bytes() != content:
        raise SyncError("Local file does not match the downloaded content after writing", path=str(target))
    log_info(LogEvent.REGISTRY_SYNC, "Local file content verified", path=str(target))


def _download(source: RemoteSource) -> bytes:
    """Download the remote document and check that it is a valid registry.

    Raises:
        NetworkError: If the request could not be completed
        HttpStatusError: If the server answered with a status other than 200
        ParseError: If the body is not a well-formed registry document
    """
    text = source.fetch_text()
    document = RegistryDocument.from_json(text, url=source.url)
    log_info(
        LogEvent.REGISTRY_SYNC,
        "JSON validation passed",
        url=source.url,
        providers=len(document.providers),
    )
    return text.encode("utf-8")


def sync_registry(
    url: Optional[str] = None,
    path: Optional[str] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    force: bool = False,
) -> SyncResult:
    """Synchronise the local registry copy with the remote document.

    Args:
        url: Remote URL; resolved through ``get_registry_url`` if None
        path: Local file; resolved through ``get_sync_target_path`` if None
        timeout: Request timeout in seconds
        force: Rewrite the file even if its content is already current

    Returns:
        SyncResult with status UPDATED, ALREADY_CURRENT or ERROR
    """
    started = time.monotonic()
    source = RemoteSource(url, timeout=timeout)
    target = Path(get_sync_target_path(path))
    log_info(LogEvent.REGISTRY_SYNC, "Starting registry sync", url=source.url, path=str(target))

    try:
        content = _download(source)
        digest = _sha256(content)

        if not force and _file_sha256(target) == digest:
            log_info(LogEvent.REGISTRY_SYNC, "Local registry is already up to date", path=str(target))
            return SyncResult(
                success=True,
                status=SyncStatus.ALREADY_CURRENT,
                message="Registry is already up to date",
                path=str(target),
                url=source.url,
                sha256=digest,
            )

        _replace_file(target, content)
        _verify_written(target, content)

        return SyncResult(
            success=True,
            status=SyncStatus.UPDATED,
            message="Registry updated successfully",
            path=str(target),
            url=source.url,
            sha256=digest,
        )
    except (LLMRegistryError, OSError) as e:
        log_error(LogEvent.REGISTRY_SYNC, f"Sync failed: {e}", url=source.url, path=str(target))
        return SyncResult(
            success=False,
            status=SyncStatus.ERROR,
            message=f"Error syncing registry: {e}",
            path=str(target),
            url=source.url,
            error=e,
        )
    finally:
        log_info(
            LogEvent.REGISTRY_SYNC,
            "Registry sync finished",
            seconds=round(time.monotonic() - started, 3),
        )


def check_for_updates(
    url: Optional[str] = None,
    path: Optional[str] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> SyncResult:
    """Check whether the remote document differs from the local copy.

    Args:
        url: Remote URL; resolved through ``get_registry_url`` if None
        path: Local file; resolved through ``get_sync_target_path`` if None
        timeout: Request timeout in seconds

    Returns:
        SyncResult with status UPDATE_AVAILABLE, ALREADY_CURRENT or ERROR
    """
    source = RemoteSource(url, timeout=timeout)
    target = Path(get_sync_target_path(path))

    try:
        content = _download(source)
        remote_digest = _sha256(content)
        local_digest = _file_sha256(target)
    except (LLMRegistryError, OSError) as e:
        log_error(LogEvent.REGISTRY_SYNC, f"Update check failed: {e}", url=source.url)
        return SyncResult(
            success=False,
            status=SyncStatus.ERROR,
            message=f"Error checking for updates: {e}",
            path=str(target),
            url=source.url,
            error=e,
        )

    if local_digest == remote_digest:
        return SyncResult(
            success=True,
            status=SyncStatus.ALREADY_CURRENT,
            message="Registry is already up to date",
            path=str(target),
            url=source.url,
            sha256=remote_digest,
        )

    message = "Registry update is available" if local_digest else "No local registry copy; download available"
    return SyncResult(
        success=True,
        status=SyncStatus.UPDATE_AVAILABLE,
        message=message,
        path=str(target),
        url=source.url,
        sha256=remote_digest,
    )
