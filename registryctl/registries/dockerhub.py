from ..errors import RegistryInputError
from ..secrets import DOCKER_HUB_SERVER
from .docker_config import DockerConfigRegistry


class DockerHubRegistry(DockerConfigRegistry):
    """Docker Hub; the repository is a user or organisation name."""
    name = "docker-hub"
    caption = "Docker Hub"
    option = 1
    repository_example = "docker.io/wso2"

    def validate_repository(self, repository: str) -> str:
        repository = super().validate_repository(repository)
        if repository == "docker.io":
            raise RegistryInputError("Invalid Docker Hub repository: username is empty")
        if repository.startswith("docker.io/"):
            repository = repository[len("docker.io/"):]
        if not repository or "/" in repository:
            raise RegistryInputError(
                f"Invalid Docker Hub repository: {repository} (expected docker.io/<username>)"
            )
        return "docker.io/" + repository

    def server(self) -> str:
        return DOCKER_HUB_SERVER
