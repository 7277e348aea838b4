from ..errors import RegistryInputError
from .docker_config import DockerConfigRegistry

QUAY_SERVER = "quay.io"


class QuayRegistry(DockerConfigRegistry):
    name = "quay"
    caption = "Quay.io"
    option = 6
    repository_example = "quay.io/wso2"

    def validate_repository(self, repository: str) -> str:
        repository = super().validate_repository(repository)
        if repository == QUAY_SERVER:
            raise RegistryInputError("Invalid Quay.io repository: organisation is empty")
        if not repository.startswith(QUAY_SERVER + "/"):
            repository = f"{QUAY_SERVER}/{repository}"
        return repository

    def server(self) -> str:
        return QUAY_SERVER
