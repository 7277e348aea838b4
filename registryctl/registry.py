"""Container registry selection for the API operator.

Flow of a `change registry` run:

1. pick a registry backend, interactively (``choose_registry_interactive``)
   or by name (``set_registry``), which returns a ``Selection``
2. in batch mode, check the supplied flags (``validate_flags``)
3. collect inputs (``read_inputs_interactive`` / ``read_inputs_from_flags``)
4. write the registry type and repository into the controller config map and
   create the credentials secret (``update_configs_secrets``)

Every failure is raised as a ``RegistryError`` subclass; nothing in here
exits the process.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterator, List, Optional

import typer
import yaml

from . import prompt
from .config import Config
from .controller_config import ControllerConfig
from .errors import (
    CatalogError,
    ControllerConfigError,
    FlagValidationError,
    InvalidSelectionError,
    KubeCommandError,
    RegistryInputError,
)
from .kube import KubeClient
from .utils import redact_sensitive_data

logger = logging.getLogger("registryctl.registry")

# Flag names accepted by the registry backends
FLAG_REPOSITORY = "repository"
FLAG_USERNAME = "username"
FLAG_PASSWORD = "password"
FLAG_KEY_FILE = "key-file"

INSTALL_OPERATOR_HINT = "Install api operator using the command: apictl install api-operator"


@dataclass
class FlagValue:
    """A command line flag value and whether the user actually supplied it."""
    value: Any = None
    is_provided: bool = False


FlagValues = Dict[str, FlagValue]


class Registry(ABC):
    """A container registry backend.

    Subclasses set the class attributes and implement reading inputs and
    provisioning the credentials secret. ``repository`` is filled in by
    ``read_inputs``.
    """

    name: str = ""
    caption: str = ""
    option: int = 0
    required_flags: FrozenSet[str] = frozenset()
    optional_flags: FrozenSet[str] = frozenset()

    def __init__(self):
        self.repository: Optional[str] = None

    def read_inputs(self, flag_values: Optional[FlagValues] = None) -> None:
        """Prompt for inputs when flag_values is None, otherwise take them from the flags."""
        if flag_values is None:
            self.read_interactive()
        else:
            self.read_flags(flag_values)

    @abstractmethod
    def read_interactive(self) -> None:
        """Prompt the user for every input."""

    @abstractmethod
    def read_flags(self, flag_values: FlagValues) -> None:
        """Take the inputs from batch mode flags."""

    @abstractmethod
    def provision_credentials(self, kube: KubeClient) -> None:
        """Create or update the credentials secret in the cluster."""

    @staticmethod
    def flag(flag_values: FlagValues, name: str, default: Any = None) -> Any:
        flag_value = flag_values.get(name)
        if flag_value is None or not flag_value.is_provided:
            return default
        return flag_value.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, option={self.option}, repository={self.repository!r})"


class Catalog:
    """Registered registry backends keyed by their menu option."""

    def __init__(self):
        self._registries: Dict[int, Registry] = {}

    def add(self, registry: Registry) -> Registry:
        option = registry.option
        if not isinstance(option, int) or isinstance(option, bool) or option < 1:
            raise CatalogError(f"Error adding registry: {registry.name}: 'option' should be positive")
        if option in self._registries:
            raise CatalogError(f"Error adding registry: {registry.name}: duplicate 'options' values ({option})")
        if self.find(registry.name) is not None:
            raise CatalogError(f"Error adding registry: {registry.name}: duplicate registry name")

        self._registries[option] = registry
        return registry

    def get(self, option: int) -> Registry:
        return self._registries[option]

    def find(self, name: str) -> Optional[Registry]:
        for registry in self._registries.values():
            if registry.name == name:
                return registry
        return None

    def options(self) -> List[int]:
        return sorted(self._registries)

    def names(self) -> List[str]:
        return [self._registries[option].name for option in self.options()]

    def __contains__(self, option: object) -> bool:
        return option in self._registries

    def __iter__(self) -> Iterator[Registry]:
        return (self._registries[option] for option in self.options())

    def __len__(self) -> int:
        return len(self._registries)


@dataclass(frozen=True)
class Selection:
    """The registry backend chosen for this run."""
    option: int
    registry: Registry

    @property
    def name(self) -> str:
        return self.registry.name


def _default_catalog() -> Catalog:
    from .registries import catalog
    return catalog


def choose_registry_interactive(catalog: Catalog = None) -> Selection:
    """List the registry types and read the user's choice."""
    catalog = catalog if catalog is not None else _default_catalog()
    if not len(catalog):
        raise InvalidSelectionError("No registry types available")

    typer.echo("Choose registry type:")
    for registry in catalog:
        typer.echo(f"{registry.option}: {registry.caption}")

    option = prompt.read_option("Choose a number", 1, len(catalog))
    if option not in catalog:
        raise InvalidSelectionError(f"Error reading registry type: no registry with option {option}")

    logger.debug(f"Selected registry option {option}")
    return Selection(option=option, registry=catalog.get(option))


def set_registry(registry_type: str, catalog: Catalog = None) -> Selection:
    """Select the registry whose name matches registry_type."""
    catalog = catalog if catalog is not None else _default_catalog()
    registry = catalog.find(registry_type)
    if registry is None:
        raise InvalidSelectionError(
            f"Invalid registry type: {registry_type}",
            hint=f"Supported registry types: {', '.join(catalog.names())}",
        )
    return Selection(option=registry.option, registry=registry)


def read_inputs_interactive(selection: Selection) -> None:
    selection.registry.read_inputs(None)


def read_inputs_from_flags(selection: Selection, flag_values: FlagValues) -> None:
    logger.debug(f"Reading {selection.name} inputs from flags: {redact_sensitive_data(_plain(flag_values))}")
    selection.registry.read_inputs(flag_values)


def validate_flags(selection: Selection, flag_values: FlagValues) -> None:
    """Check batch mode flags against what the selected registry accepts.

    Missing required flags are reported before unsupported ones.

    Raises:
        FlagValidationError: On the first offending flag
    """
    registry = selection.registry

    for flag in sorted(registry.required_flags):
        flag_value = flag_values.get(flag)
        if flag_value is None or not flag_value.is_provided:
            raise FlagValidationError(f"Required flag is missing in batch mode. Flag: {flag}", flag)

    supported = registry.required_flags | registry.optional_flags
    for flag in sorted(flag_values):
        if flag_values[flag].is_provided and flag not in supported:
            raise FlagValidationError(f"Invalid, not supported flag found in batch mode. Flag: {flag}", flag)


def update_ctrl_config(kube: KubeClient, registry_type: str, repository: str) -> ControllerConfig:
    """Set the registry type and repository in the controller config map."""
    namespace = Config.CONTROLLER_NAMESPACE
    name = Config.CONTROLLER_CONFIG_MAP

    try:
        config_map_yaml = kube.get_resource_yaml("configmap", name, namespace)
    except KubeCommandError as e:
        logger.debug(f"Reading {namespace}/{name} failed: {e}")
        raise ControllerConfigError(f"Error reading {name}", hint=INSTALL_OPERATOR_HINT) from e

    try:
        controller_config = ControllerConfig.from_yaml(config_map_yaml)
    except (yaml.YAMLError, ValueError) as e:
        raise ControllerConfigError(f"Error reading {name}: {e}") from e

    logger.debug(
        f"Changing registry from {controller_config.registry_type}/{controller_config.repository} "
        f"to {registry_type}/{repository}"
    )
    controller_config.registry_type = registry_type
    controller_config.repository = repository

    try:
        configured = controller_config.to_yaml()
    except yaml.YAMLError as e:
        raise ControllerConfigError(f"Error rendering {name}: {e}") from e

    try:
        kube.apply_from_text(configured)
    except KubeCommandError as e:
        raise ControllerConfigError(f"Error creating {name}s: {e}") from e

    return controller_config


def update_configs_secrets(selection: Selection, kube: KubeClient) -> None:
    """Update the controller config map, then create the credentials secret.

    The config map goes first: it fails when the operator is not installed,
    and in that case no secret has been created yet.
    """
    registry = selection.registry
    if not registry.repository:
        raise RegistryInputError(f"Repository is not set for registry type: {registry.name}")

    update_ctrl_config(kube, registry.name, registry.repository)
    logger.info(f"Controller config updated: registry type={registry.name}, repository={registry.repository}")

    try:
        registry.provision_credentials(kube)
    except Exception:
        logger.warning(
            f"Controller config now points at {registry.name} but its credentials secret was not created"
        )
        raise


def _plain(flag_values: FlagValues) -> Dict[str, Any]:
    return {name: fv.value for name, fv in flag_values.items() if fv.is_provided}
