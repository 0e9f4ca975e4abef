"""
Configuration validation utilities.

Typed accessors over environment variables with placeholder detection,
so a copied `.env.example` never silently enables the generative resolver.
"""
import os
import warnings
from typing import Optional
from .exceptions import ConfigurationError


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_required_env(key: str, description: str = None) -> str:
    """
    Get required environment variable with validation.

    :param key: Environment variable name
    :param description: Human-readable description for error messages
    :return: Environment variable value
    :raises: ConfigurationError if not set or a placeholder
    """
    value = os.getenv(key)

    if not value:
        desc = description or key
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Set it as an environment variable or in a .env file "
            f"in the project root.\n\n"
            f"Description: {desc}"
        )

    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} appears to be a placeholder value "
            f"({_mask_secret(value)}). Please set a real value."
        )

    return value


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable, falling back to default for placeholders.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default

    return value


def get_bool_env(key: str, default: bool) -> bool:
    """Parse a boolean flag such as ENABLE_GENERATIVE_RESOLVER."""
    raw = get_optional_env(key)
    if raw is None or raw.strip() == "":
        return default

    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False

    raise ConfigurationError(
        f"{key} must be a boolean (true/false), got {raw!r}"
    )


def get_float_env(
    key: str,
    default: float,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    """Parse a float setting and check its bounds."""
    raw = get_optional_env(key)
    if raw is None or raw.strip() == "":
        return default

    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")

    _check_bounds(key, value, min_value, max_value)
    return value


def get_int_env(
    key: str,
    default: int,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Parse an integer setting and check its bounds."""
    raw = get_optional_env(key)
    if raw is None or raw.strip() == "":
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")

    _check_bounds(key, value, min_value, max_value)
    return value


def has_api_key(key: str) -> bool:
    """True when the key is set to something that is not a placeholder."""
    value = os.getenv(key)
    return bool(value) and not _is_placeholder(value)


def validate_path(path: str, path_name: str, must_exist: bool = False) -> str:
    """
    Validate file/directory path.

    :param path: Path to validate
    :param path_name: Name of the path (for error messages)
    :param must_exist: Whether path must exist
    :return: Validated path
    :raises: ConfigurationError if invalid
    """
    if not path:
        raise ConfigurationError(f"{path_name} is required.")

    if must_exist and not os.path.exists(path):
        raise ConfigurationError(
            f"{path_name} does not exist: {path}\n"
            f"Please check the path and ensure the directory exists."
        )

    return path


def _check_bounds(key, value, min_value, max_value) -> None:
    if min_value is not None and value < min_value:
        raise ConfigurationError(f"{key} must be >= {min_value}, got {value}")
    if max_value is not None and value > max_value:
        raise ConfigurationError(f"{key} must be <= {max_value}, got {value}")


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "placeholder",
        "xxx",
        "sk-0000",
        "gsk_0000",
        "replace",
        "changeme",
    ]

    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """Mask secret for safe display in error messages."""
    if not secret or len(secret) <= show_chars * 2:
        return "***"

    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
