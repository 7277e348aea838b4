"""registryctl - choose and configure the container registry of the API operator."""

__version__ = "0.1.0"
