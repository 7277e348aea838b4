"""Registries authenticated with a username and password.

Credentials end up in a kubernetes.io/dockerconfigjson secret, the same
secret `kubectl create secret docker-registry` would produce.
"""
import logging
from typing import Optional

from .. import prompt
from ..errors import RegistryInputError
from ..kube import KubeClient
from ..registry import (
    FLAG_PASSWORD,
    FLAG_REPOSITORY,
    FLAG_USERNAME,
    FlagValues,
    Registry,
)
from ..secrets import apply_secret, docker_registry_secret

logger = logging.getLogger("registryctl.registries")

DOCKER_CREDENTIALS_SECRET = "docker-registry-credentials"


class DockerConfigRegistry(Registry):
    required_flags = frozenset({FLAG_REPOSITORY, FLAG_USERNAME, FLAG_PASSWORD})
    secret_name = DOCKER_CREDENTIALS_SECRET
    repository_example = ""

    def __init__(self):
        super().__init__()
        self.username: Optional[str] = None
        self.password: Optional[str] = None

    def read_interactive(self) -> None:
        label = "Enter repository name"
        if self.repository_example:
            label += f" (e.g. {self.repository_example})"
        self.repository = self.validate_repository(prompt.read_value(label))
        self.username = prompt.read_value("Enter username")
        self.password = prompt.read_value("Enter password", hide_input=True)

    def read_flags(self, flag_values: FlagValues) -> None:
        repository = self.flag(flag_values, FLAG_REPOSITORY)
        username = self.flag(flag_values, FLAG_USERNAME)
        password = self.flag(flag_values, FLAG_PASSWORD)
        for flag, value in ((FLAG_REPOSITORY, repository), (FLAG_USERNAME, username), (FLAG_PASSWORD, password)):
            if not value:
                raise RegistryInputError(f"Empty value for flag: {flag}")

        self.repository = self.validate_repository(repository.strip())
        self.username = username.strip()
        self.password = password

    def validate_repository(self, repository: str) -> str:
        """Check and normalise the repository; subclasses add backend rules."""
        repository = repository.rstrip("/")
        if not repository:
            raise RegistryInputError("Repository name is empty")
        return repository

    def server(self) -> str:
        """The registry host the credentials are for."""
        return host_of(self.repository)

    def provision_credentials(self, kube: KubeClient) -> None:
        if not self.username or self.password is None:
            raise RegistryInputError(f"Credentials are not set for registry type: {self.name}")
        server = self.server()
        logger.debug(f"Creating docker config secret for {server}")
        apply_secret(kube, docker_registry_secret(self.secret_name, server, self.username, self.password))


def host_of(repository: str) -> str:
    """Return the registry host of a host qualified repository like 'host:5000/team'."""
    host, sep, path = repository.partition("/")
    if not sep or not path or not host:
        raise RegistryInputError(
            f"Invalid repository: {repository} (expected <registry-host>/<repository>)"
        )
    return host
