"""Path and URL resolution for the registry document.

This module resolves where the local registry copy lives, following the XDG
Base Directory Specification for the user data directory, and which remote
URL the registry is synchronised from.
"""

import os
from importlib import resources
from pathlib import Path
from typing import Optional

import platformdirs

# Application name used for directory paths
APP_NAME = "llm-registry"

# Environment variable names
ENV_REGISTRY_PATH = "LLMR_REGISTRY_PATH"
ENV_DATA_DIR = "LLMR_DATA_DIR"
ENV_REGISTRY_URL = "LLMR_REGISTRY_URL"

# Default filename of the registry document
REGISTRY_FILENAME = "llm_registry.json"

DEFAULT_REGISTRY_URL = "https://raw.githubusercontent.com/lone-yu-cmd/LLM-List/main/llm_registry.json"

# Package holding the bundled copy of the registry
BUNDLED_DATA_PACKAGE = "llm_registry.data"


def get_user_data_dir() -> Path:
    """Get the user data directory, respecting the LLMR_DATA_DIR override."""
    custom_dir = os.getenv(ENV_DATA_DIR)
    if custom_dir:
        return Path(custom_dir)
    return Path(platformdirs.user_data_dir(APP_NAME))


def ensure_user_data_dir_exists() -> Path:
    """Ensure that the user data directory exists and is writable.

    Returns:
        The user data directory

    Raises:
        OSError: If the directory cannot be created
        PermissionError: If the directory exists but is not writable
    """
    user_dir = get_user_data_dir()

    if user_dir.exists():
        if not os.access(user_dir, os.W_OK):
            raise PermissionError(f"Data directory exists but is not writable: {user_dir}")
        return user_dir

    os.makedirs(user_dir, exist_ok=True)

    if not os.access(user_dir, os.W_OK):
        raise PermissionError(f"Created data directory but it is not writable: {user_dir}")
    return user_dir


def get_bundled_registry_path() -> Optional[Path]:
    """Get the path of the registry copy shipped inside the package.

    Returns:
        Path to the bundled file, or None if the package was installed without it
    """
    try:
        bundled = resources.files(BUNDLED_DATA_PACKAGE) / REGISTRY_FILENAME
        if bundled.is_file():
            return Path(str(bundled))
    except (ModuleNotFoundError, FileNotFoundError):
        pass
    return None


def get_registry_path(explicit_path: Optional[str] = None) -> str:
    """Get the path the registry document is read from.

    Precedence: explicit path, ``LLMR_REGISTRY_PATH``, the synchronised copy in
    the user data directory, then the bundled package copy. An explicit path or
    environment path is returned even if the file does not exist, so a missing
    file is reported as absent rather than silently replaced.

    Args:
        explicit_path: Path passed by the caller, if any

    Returns:
        Path to the registry file
    """
    # 1. Explicit configuration
    if explicit_path:
        return str(explicit_path)

    # 2. Environment variable
    env_path = os.environ.get(ENV_REGISTRY_PATH)
    if env_path:
        return env_path

    # 3. User data directory
    user_path = get_user_data_dir() / REGISTRY_FILENAME
    if user_path.is_file():
        return str(user_path)

    # 4. Fall back to bundled data
    bundled = get_bundled_registry_path()
    if bundled is not None:
        return str(bundled)
    return str(user_path)


def get_sync_target_path(explicit_path: Optional[str] = None) -> str:
    """Get the path a synchronised registry copy is written to.

    The bundled copy is never a sync target.

    Args:
        explicit_path: Path passed by the caller, if any

    Returns:
        Path to write the registry file to
    """
    if explicit_path:
        return str(explicit_path)

    env_path = os.environ.get(ENV_REGISTRY_PATH)
    if env_path:
        return env_path

    return str(get_user_data_dir() / REGISTRY_FILENAME)


def get_registry_url(explicit_url: Optional[str] = None) -> str:
    """Get the remote registry URL.

    Args:
        explicit_url: URL passed by the caller, if any

    Returns:
        URL to fetch the registry from
    """
    if explicit_url:
        return explicit_url
    return os.environ.get(ENV_REGISTRY_URL) or DEFAULT_REGISTRY_URL
