"""Registry backends supported by the API operator.

``catalog`` is the default catalog used by the CLI. Each backend is
registered once, at import time.
"""
from ..registry import Catalog
from .acr import AcrRegistry
from .dockerhub import DockerHubRegistry
from .ecr import AmazonEcrRegistry
from .gcr import GcrRegistry
from .harbor import HarborRegistry
from .http_private import HttpRegistry
from .quay import QuayRegistry

BACKENDS = (
    DockerHubRegistry,
    AmazonEcrRegistry,
    GcrRegistry,
    AcrRegistry,
    HarborRegistry,
    QuayRegistry,
    HttpRegistry,
)


def build_catalog() -> Catalog:
    """Return a new catalog holding a fresh instance of every backend."""
    new_catalog = Catalog()
    for backend in BACKENDS:
        new_catalog.add(backend())
    return new_catalog


catalog = build_catalog()

__all__ = [
    'catalog',
    'build_catalog',
    'AcrRegistry',
    'AmazonEcrRegistry',
    'DockerHubRegistry',
    'GcrRegistry',
    'HarborRegistry',
    'HttpRegistry',
    'QuayRegistry',
]
