"""Exceptions raised by registryctl.

Library code raises these; only the CLI decides how to report them and
which exit code to use.
"""
from typing import Optional


class RegistryError(Exception):
    """Base class for all registryctl errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n{self.hint}"
        return self.message


class CatalogError(RegistryError):
    """A registry backend could not be registered in the catalog."""


class InvalidSelectionError(RegistryError):
    """The requested registry type does not exist or the choice was invalid."""


class FlagValidationError(RegistryError):
    """Batch mode flags do not match what the selected registry accepts."""

    def __init__(self, message: str, flag: str):
        super().__init__(message)
        self.flag = flag


class RegistryInputError(RegistryError):
    """A registry input value is missing or unusable."""


class ControllerConfigError(RegistryError):
    """The operator controller config map could not be read or written."""


class KubeCommandError(RegistryError):
    """A call to the cluster failed."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
