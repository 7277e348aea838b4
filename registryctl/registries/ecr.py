"""Amazon Elastic Container Registry.

The operator authenticates with an AWS shared credentials file, so the whole
file is stored in a generic secret.
"""
import logging
import re
from pathlib import Path
from typing import Optional

from .. import prompt
from ..errors import RegistryInputError
from ..kube import KubeClient
from ..registry import FLAG_KEY_FILE, FLAG_REPOSITORY, FlagValues, Registry
from ..secrets import apply_secret, generic_secret
from ..utils import resolve_file

logger = logging.getLogger("registryctl.registries.ecr")

DEFAULT_CREDENTIALS_FILE = "~/.aws/credentials"
AWS_CREDENTIALS_SECRET = "aws-cred"
ECR_REPOSITORY_PATTERN = re.compile(r"^\d{12}\.dkr\.ecr\.[a-z0-9-]+\.amazonaws\.com(\.cn)?/.+$")


class AmazonEcrRegistry(Registry):
    name = "amazon-ecr"
    caption = "Amazon ECR"
    option = 2
    required_flags = frozenset({FLAG_REPOSITORY})
    optional_flags = frozenset({FLAG_KEY_FILE})

    def __init__(self):
        super().__init__()
        self.credentials_file: Optional[Path] = None

    def read_interactive(self) -> None:
        self.repository = validate_repository(
            prompt.read_value("Enter repository name (e.g. 123456789012.dkr.ecr.us-east-1.amazonaws.com/apis)")
        )
        path = prompt.read_value("Enter AWS credentials file", default=DEFAULT_CREDENTIALS_FILE)
        self.credentials_file = resolve_file(path, "AWS credentials file")

    def read_flags(self, flag_values: FlagValues) -> None:
        repository = self.flag(flag_values, FLAG_REPOSITORY)
        if not repository:
            raise RegistryInputError(f"Empty value for flag: {FLAG_REPOSITORY}")
        self.repository = validate_repository(repository)
        path = self.flag(flag_values, FLAG_KEY_FILE) or DEFAULT_CREDENTIALS_FILE
        self.credentials_file = resolve_file(path, "AWS credentials file")

    def provision_credentials(self, kube: KubeClient) -> None:
        if self.credentials_file is None:
            raise RegistryInputError(f"Credentials file is not set for registry type: {self.name}")
        content = self.credentials_file.read_bytes()
        logger.debug(f"Creating secret {AWS_CREDENTIALS_SECRET} from {self.credentials_file}")
        apply_secret(kube, generic_secret(AWS_CREDENTIALS_SECRET, {"credentials": content}))


def validate_repository(repository: str) -> str:
    repository = repository.strip().rstrip("/")
    if not ECR_REPOSITORY_PATTERN.match(repository):
        raise RegistryInputError(
            f"Invalid Amazon ECR repository: {repository} "
            "(expected <account-id>.dkr.ecr.<region>.amazonaws.com/<repository>)"
        )
    return repository
