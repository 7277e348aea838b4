"""Kubernetes secret manifests for registry credentials."""
import json
import logging
from typing import Dict, Optional, Union

import yaml

from .config import Config
from .kube import KubeClient
from .utils import b64encode

logger = logging.getLogger("registryctl.secrets")

DOCKER_HUB_SERVER = "https://index.docker.io/v1/"


def docker_registry_secret(
    name: str,
    server: str,
    username: str,
    password: str,
    email: Optional[str] = None,
    namespace: str = None,
) -> Dict:
    """Build a kubernetes.io/dockerconfigjson secret, like `kubectl create secret docker-registry`."""
    auth = {
        "username": username,
        "password": password,
        "auth": b64encode(f"{username}:{password}"),
    }
    if email:
        auth["email"] = email
    docker_config = {"auths": {server: auth}}

    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "type": "kubernetes.io/dockerconfigjson",
        "metadata": {
            "name": name,
            "namespace": namespace or Config.CREDENTIALS_NAMESPACE,
        },
        "data": {
            ".dockerconfigjson": b64encode(json.dumps(docker_config)),
        },
    }


def generic_secret(name: str, files: Dict[str, Union[str, bytes]], namespace: str = None) -> Dict:
    """Build an Opaque secret holding the given file contents keyed by file name."""
    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "type": "Opaque",
        "metadata": {
            "name": name,
            "namespace": namespace or Config.CREDENTIALS_NAMESPACE,
        },
        "data": {key: b64encode(content) for key, content in files.items()},
    }


def apply_secret(kube: KubeClient, manifest: Dict) -> None:
    """Create or update a secret in the cluster."""
    metadata = manifest["metadata"]
    logger.info(f"Applying secret {metadata['namespace']}/{metadata['name']}")
    kube.apply_from_text(yaml.safe_dump(manifest, default_flow_style=False, sort_keys=False))
