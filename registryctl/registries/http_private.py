from .docker_config import DockerConfigRegistry, host_of


class HttpRegistry(DockerConfigRegistry):
    """A private registry served over plain HTTP, e.g. 10.0.0.5:5000/apis."""
    name = "http"
    caption = "HTTP Private Registry"
    option = 7
    repository_example = "10.0.0.5:5000/apis"

    def validate_repository(self, repository: str) -> str:
        repository = super().validate_repository(repository)
        for scheme in ("http://", "https://"):
            if repository.startswith(scheme):
                repository = repository[len(scheme):]
        host_of(repository)
        return repository
