import pytest
import yaml

from registryctl.errors import KubeCommandError
from registryctl.kube import KubeClient
from registryctl.registry import Catalog, Registry

CONFIG_MAP_YAML = """
apiVersion: v1
kind: ConfigMap
metadata:
  name: controller-config
  namespace: wso2-system
  creationTimestamp: "2020-05-01T10:00:00Z"
  resourceVersion: "1234"
data:
  registryType: DOCKER_HUB
  repositoryName: docker.io/old
  mgwToolkitImg: wso2am/wso2micro-gw-toolkit:3.2.0
  kanikoImg: gcr.io/kaniko-project/executor:v0.24.0
"""


class FakeKube(KubeClient):
    """Records every cluster call in order."""

    def __init__(self, config_map_yaml=CONFIG_MAP_YAML, fail_get=False, fail_apply_kind=None):
        self.config_map_yaml = config_map_yaml
        self.fail_get = fail_get
        self.fail_apply_kind = fail_apply_kind
        self.calls = []
        self.applied = []

    def get_resource_yaml(self, kind, name, namespace):
        self.calls.append(("get", kind, name, namespace))
        if self.fail_get:
            raise KubeCommandError(f'configmaps "{name}" not found', returncode=1)
        return self.config_map_yaml

    def apply_from_text(self, text):
        doc = yaml.safe_load(text)
        self.calls.append(("apply", doc["kind"], doc["metadata"]["name"]))
        if doc["kind"] == self.fail_apply_kind:
            raise KubeCommandError("apply failed", returncode=1)
        self.applied.append(doc)


class StubRegistry(Registry):
    def __init__(self, name, option, required=(), optional=(), caption=None):
        super().__init__()
        self.name = name
        self.option = option
        self.caption = caption or name.title()
        self.required_flags = frozenset(required)
        self.optional_flags = frozenset(optional)
        self.read_with = "unset"
        self.fail_provision = False

    def read_interactive(self):
        self.read_with = None
        self.repository = "docker.io/interactive"

    def read_flags(self, flag_values):
        self.read_with = flag_values
        self.repository = self.flag(flag_values, "repository", "docker.io/from-flags")

    def provision_credentials(self, kube):
        kube.calls.append(("provision", self.name))
        if self.fail_provision:
            raise KubeCommandError("secret apply failed")


@pytest.fixture
def kube():
    return FakeKube()


@pytest.fixture
def docker_hub_catalog():
    catalog = Catalog()
    catalog.add(StubRegistry("docker-hub", 1, required={"username", "password"}, optional={"url"}))
    return catalog


@pytest.fixture
def answers(monkeypatch):
    """Feed canned answers to typer.prompt, in order."""
    import typer

    def feed(*values):
        remaining = iter(values)

        def fake_prompt(text, *args, **kwargs):
            return next(remaining)

        monkeypatch.setattr(typer, "prompt", fake_prompt)

    return feed
