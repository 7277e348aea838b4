"""Access to the Kubernetes cluster.

Two interchangeable clients are provided. ``KubectlClient`` shells out to
kubectl the same way an operator would from a terminal, ``KubernetesApiClient``
talks to the API server through the official Python client. Both expose the
same two calls used by the registry configurator:

- ``get_resource_yaml(kind, name, namespace)`` returns the resource as YAML text
- ``apply_from_text(text)`` applies one or more YAML documents
"""
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

import yaml
from kubernetes import client
from kubernetes.config import ConfigException
from kubernetes.client.rest import ApiException

from .config import Config
from .errors import KubeCommandError
from .utils.kube import load_kubeconfig

logger = logging.getLogger("registryctl.kube")


class KubeClient(ABC):
    """Interface of the cluster collaborator."""

    @abstractmethod
    def get_resource_yaml(self, kind: str, name: str, namespace: str) -> str:
        """Return the resource as YAML text."""

    @abstractmethod
    def apply_from_text(self, text: str) -> None:
        """Apply one or more YAML documents."""


class KubectlClient(KubeClient):
    """Cluster access through the kubectl binary."""

    def __init__(self, kubectl: str = None, timeout: int = None):
        self.kubectl = kubectl or Config.KUBECTL
        self.timeout = timeout or Config.KUBECTL_TIMEOUT

    def _run(self, args: List[str], input_text: Optional[str] = None) -> str:
        cmd = [self.kubectl] + args
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except FileNotFoundError as e:
            raise KubeCommandError(f"{self.kubectl} not found in PATH") from e
        except subprocess.TimeoutExpired as e:
            raise KubeCommandError(f"'{' '.join(cmd)}' timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise KubeCommandError(
                f"'{' '.join(cmd)}' failed with exit code {e.returncode}: {stderr}",
                returncode=e.returncode,
                stderr=stderr,
            ) from e
        return result.stdout

    def get_resource_yaml(self, kind: str, name: str, namespace: str) -> str:
        return self._run(["get", kind, name, "-n", namespace, "-o", "yaml"])

    def apply_from_text(self, text: str) -> None:
        output = self._run(["apply", "-f", "-"], input_text=text)
        for line in output.splitlines():
            logger.info(line)


class KubernetesApiClient(KubeClient):
    """Cluster access through the kubernetes Python client.

    Only ConfigMaps and Secrets are supported, which is all the registry
    configurator reads or writes.
    """

    def __init__(self, kubeconfig: str = None, core_api: client.CoreV1Api = None):
        if core_api is None:
            try:
                source = load_kubeconfig(kubeconfig or Config.KUBECONFIG or None)
            except (FileNotFoundError, ConfigException) as e:
                raise KubeCommandError(f"Failed to load cluster credentials: {e}") from e
            logger.debug(f"Loaded cluster credentials from {source}")
            core_api = client.CoreV1Api()
        self.core = core_api

    def _handlers(self, kind: str):
        handlers = {
            "configmap": (
                self.core.read_namespaced_config_map,
                self.core.create_namespaced_config_map,
                self.core.replace_namespaced_config_map,
            ),
            "secret": (
                self.core.read_namespaced_secret,
                self.core.create_namespaced_secret,
                self.core.replace_namespaced_secret,
            ),
        }
        key = kind.lower()
        if key in ("cm", "configmaps"):
            key = "configmap"
        elif key == "secrets":
            key = "secret"
        if key not in handlers:
            raise KubeCommandError(f"Unsupported resource kind: {kind}")
        return handlers[key]

    def get_resource_yaml(self, kind: str, name: str, namespace: str) -> str:
        read, _, _ = self._handlers(kind)
        try:
            obj = read(name, namespace)
        except ApiException as e:
            raise KubeCommandError(
                f"Failed to read {kind} {namespace}/{name}: {e.reason}",
                returncode=e.status,
                stderr=e.body or "",
            ) from e
        doc = self.core.api_client.sanitize_for_serialization(obj)
        return yaml.safe_dump(doc, default_flow_style=False, sort_keys=False)

    def apply_from_text(self, text: str) -> None:
        try:
            docs = [doc for doc in yaml.safe_load_all(text) if doc]
        except yaml.YAMLError as e:
            raise KubeCommandError(f"Invalid YAML: {e}") from e

        for doc in docs:
            kind = doc.get("kind", "")
            metadata = doc.get("metadata") or {}
            name = metadata.get("name")
            namespace = metadata.get("namespace", "default")
            _, create, replace = self._handlers(kind)
            try:
                replace(name, namespace, doc)
                logger.info(f"{kind.lower()}/{name} configured")
            except ApiException as e:
                if e.status != 404:
                    raise KubeCommandError(
                        f"Failed to apply {kind} {namespace}/{name}: {e.reason}",
                        returncode=e.status,
                        stderr=e.body or "",
                    ) from e
                try:
                    create(namespace, doc)
                except ApiException as ce:
                    raise KubeCommandError(
                        f"Failed to create {kind} {namespace}/{name}: {ce.reason}",
                        returncode=ce.status,
                        stderr=ce.body or "",
                    ) from ce
                logger.info(f"{kind.lower()}/{name} created")


def get_kube_client(backend: str = None) -> KubeClient:
    """Return the cluster client selected by REGISTRYCTL_KUBE_BACKEND."""
    backend = (backend or Config.KUBE_BACKEND).lower()
    if backend == "api":
        return KubernetesApiClient()
    if backend == "kubectl":
        return KubectlClient()
    raise ValueError(f"Unknown kube backend: {backend}")
