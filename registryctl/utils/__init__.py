"""Utility functions and helpers for the registryctl application."""
import base64
import os
from pathlib import Path
from typing import Any

from ..config import Config
from ..errors import RegistryInputError

def redact_sensitive_data(data: Any) -> Any:
    """Recursively redact sensitive data from dictionaries and lists.

    Args:
        data: Input data that might contain sensitive information

    Returns:
        Data with sensitive values redacted
    """
    if isinstance(data, dict):
        return {
            k: "[REDACTED]" if isinstance(k, str) and any(
                redact_key.lower() in k.lower()
                for redact_key in Config.REDACT_KEYS
            ) else redact_sensitive_data(v)
            for k, v in data.items()
        }
    elif isinstance(data, (list, tuple)):
        return [redact_sensitive_data(item) for item in data]
    return data

def b64encode(value) -> str:
    """Base64 encode a str or bytes value into a str."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return base64.b64encode(value).decode("ascii")

def resolve_file(path: str, what: str = "File") -> Path:
    """Expand and resolve a user supplied path, failing if it does not exist.

    Raises:
        RegistryInputError: If the path is empty or not a regular file
    """
    if not path:
        raise RegistryInputError(f"{what} path is empty")
    resolved = Path(os.path.expanduser(path)).resolve()
    if not resolved.is_file():
        raise RegistryInputError(f"{what} not found: {resolved}")
    return resolved
