from .docker_config import DockerConfigRegistry, host_of


class HarborRegistry(DockerConfigRegistry):
    name = "harbor"
    caption = "Harbor"
    option = 5
    repository_example = "harbor.example.com/library"

    def validate_repository(self, repository: str) -> str:
        repository = super().validate_repository(repository)
        host_of(repository)
        return repository
