"""Configuration for the Goiki content store and server.

Reads settings from CLI args, environment variables, .env files, and
YAML config file fallbacks.

Precedence (highest to lowest):
    CLI args > Environment variables > .env file > YAML config > Built-in defaults

Environment variables:
    GOIKI_DATA_DIR: Git working tree holding the documents (default: ./data)
    GOIKI_FILE_EXTENSION: Document file extension (default: md)
    GOIKI_NAME: Wiki name (default: Goiki)
    GOIKI_INDEX_PAGE: Title of the front page (default: FrontPage)
    GOIKI_GIT: git executable (default: git)
    GOIKI_COMMAND_TIMEOUT: Seconds before a git call is abandoned (default: none)
    GOIKI_MAX_CONTENT_SIZE: Largest accepted document, in bytes (default: 1000000)
    GOIKI_INIT: Initialize the data dir as a repository if needed (default: false)
    GOIKI_DEBUG: Enable debug logging (default: false)
"""

import logging
import os
import re
from dataclasses import dataclass

from .validators import validate_title

logger = logging.getLogger(__name__)

_EXTENSION_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass
class Config:
    data_dir: str = "./data"
    file_extension: str = "md"
    name: str = "Goiki"
    index_page: str = "FrontPage"
    git_binary: str = "git"
    command_timeout: float | None = None
    max_content_size: int = 1_000_000
    init: bool = False
    debug: bool = False


def validate_config(config: Config) -> None:
    """Validate configuration values and raise ValueError if invalid.

    Args:
        config: Config instance to validate.

    Raises:
        ValueError: If any value is out of range or malformed.
    """
    config.data_dir = config.data_dir.strip()
    if not config.data_dir:
        raise ValueError(
            "Data directory cannot be empty. Set GOIKI_DATA_DIR environment variable."
        )

    # Normalize extension: ".md" and "md" are equivalent
    config.file_extension = config.file_extension.strip().lstrip(".")
    if not _EXTENSION_PATTERN.match(config.file_extension):
        raise ValueError(
            f"Invalid file extension '{config.file_extension}': "
            "use letters, digits, '-' or '_' only"
        )

    is_valid, reason = validate_title(config.index_page)
    if not is_valid:
        raise ValueError(f"Invalid index page: {reason}")

    if config.command_timeout is not None and config.command_timeout <= 0:
        raise ValueError(
            f"Invalid command timeout '{config.command_timeout}': must be positive"
        )

    if config.max_content_size < 1:
        raise ValueError(
            f"Invalid max content size '{config.max_content_size}': must be positive"
        )


def _get_bool_env(key: str) -> bool | None:
    """Return True/False from env var, or None if unset."""
    val = os.getenv(key)
    if val is None:
        return None
    return val.lower() in ("true", "1", "yes", "on")


def resolve_bool(flag: bool, env_key: str, fallback: object) -> bool:
    """Resolve a boolean setting: a set CLI flag wins, then the env var, then *fallback*."""
    if flag:
        return True
    env_val = _get_bool_env(env_key)
    if env_val is not None:
        return env_val
    return bool(fallback)


def load_config(
    data_dir: str | None = None,
    file_extension: str | None = None,
    name: str | None = None,
    init: bool = False,
    debug: bool = False,
    yaml_fallbacks: dict | None = None,
) -> Config:
    """Load configuration with unified precedence.

    Resolution order for each field (highest to lowest):
        CLI arg > env var / .env > yaml_fallbacks > built-in default

    The caller is responsible for calling ``load_dotenv()`` before this
    function so that .env values are available via ``os.getenv()``.

    Args:
        data_dir: Override data directory.
        file_extension: Override document file extension.
        name: Override wiki name.
        init: Initialize the repository if missing (CLI flag).
        debug: Enable debug logging (CLI flag).
        yaml_fallbacks: Dict of values from the YAML config file ``wiki``
            section. Used when CLI arg and env var are both unset.

    Returns:
        Validated Config instance.

    Raises:
        ValueError: If a value is malformed after checking all sources.
    """
    fb = yaml_fallbacks or {}
    defaults = Config()

    # --- String fields: CLI > env > YAML > default ---

    final_data_dir = (
        data_dir
        or os.getenv("GOIKI_DATA_DIR")
        or fb.get("data_dir")
        or defaults.data_dir
    )
    final_extension = (
        file_extension
        or os.getenv("GOIKI_FILE_EXTENSION")
        or fb.get("file_extension")
        or defaults.file_extension
    )
    final_name = (
        name or os.getenv("GOIKI_NAME") or fb.get("name") or defaults.name
    )
    final_index = (
        os.getenv("GOIKI_INDEX_PAGE")
        or fb.get("index_page")
        or defaults.index_page
    )
    final_git = (
        os.getenv("GOIKI_GIT") or fb.get("git_binary") or defaults.git_binary
    )

    # --- Boolean fields: CLI > env > YAML > default ---

    final_init = resolve_bool(init, "GOIKI_INIT", fb.get("init", False))
    final_debug = resolve_bool(debug, "GOIKI_DEBUG", fb.get("debug", False))

    # --- Numeric fields: env > YAML > default ---

    timeout_raw = os.getenv("GOIKI_COMMAND_TIMEOUT")
    if timeout_raw is not None:
        try:
            final_timeout: float | None = float(timeout_raw)
        except ValueError:
            raise ValueError(
                f"Invalid GOIKI_COMMAND_TIMEOUT '{timeout_raw}': must be a number of seconds"
            ) from None
    elif fb.get("command_timeout") is not None:
        final_timeout = float(fb["command_timeout"])
    else:
        final_timeout = defaults.command_timeout

    size_raw = os.getenv("GOIKI_MAX_CONTENT_SIZE")
    if size_raw is not None:
        try:
            final_size = int(size_raw)
        except ValueError:
            raise ValueError(
                f"Invalid GOIKI_MAX_CONTENT_SIZE '{size_raw}': must be a number of bytes"
            ) from None
    elif "max_content_size" in fb:
        final_size = int(fb["max_content_size"])
    else:
        final_size = defaults.max_content_size

    config = Config(
        data_dir=str(final_data_dir),
        file_extension=str(final_extension),
        name=str(final_name),
        index_page=str(final_index),
        git_binary=str(final_git),
        command_timeout=final_timeout,
        max_content_size=final_size,
        init=final_init,
        debug=final_debug,
    )

    validate_config(config)

    return config
