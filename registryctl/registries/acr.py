from ..errors import RegistryInputError
from .docker_config import DockerConfigRegistry, host_of

ACR_DOMAIN = ".azurecr.io"


class AcrRegistry(DockerConfigRegistry):
    """Azure Container Registry, authenticated with a service principal or admin user."""
    name = "azure-acr"
    caption = "Azure Container Registry"
    option = 4
    repository_example = "myregistry.azurecr.io/apis"

    def validate_repository(self, repository: str) -> str:
        repository = super().validate_repository(repository)
        if not host_of(repository).endswith(ACR_DOMAIN):
            raise RegistryInputError(
                f"Invalid ACR repository: {repository} (expected <registry>{ACR_DOMAIN}/<repository>)"
            )
        return repository
