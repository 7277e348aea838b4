import pytest
import yaml

from conftest import FakeKube, StubRegistry
from registryctl.controller_config import ControllerConfig
from registryctl.errors import (
    CatalogError,
    ControllerConfigError,
    FlagValidationError,
    InvalidSelectionError,
    KubeCommandError,
    RegistryInputError,
)
from registryctl.registry import (
    Catalog,
    FlagValue,
    Registry,
    Selection,
    choose_registry_interactive,
    read_inputs_from_flags,
    read_inputs_interactive,
    set_registry,
    update_configs_secrets,
    update_ctrl_config,
    validate_flags,
)

PROVIDED = FlagValue("value", True)
ABSENT = FlagValue(None, False)


def test_add_and_get():
    catalog = Catalog()
    registry = StubRegistry("harbor", 3)
    catalog.add(registry)
    assert catalog.get(3) is registry
    assert catalog.find("harbor") is registry
    assert len(catalog) == 1

@pytest.mark.parametrize("option", [0, -1])
def test_add_rejects_non_positive_option(option):
    catalog = Catalog()
    with pytest.raises(CatalogError, match="'option' should be positive"):
        catalog.add(StubRegistry("bad", option))
    assert len(catalog) == 0

def test_add_rejects_duplicate_option():
    catalog = Catalog()
    first = catalog.add(StubRegistry("first", 1))
    with pytest.raises(CatalogError, match="duplicate 'options'"):
        catalog.add(StubRegistry("second", 1))
    assert catalog.get(1) is first

def test_add_rejects_duplicate_name():
    catalog = Catalog()
    catalog.add(StubRegistry("docker-hub", 1))
    with pytest.raises(CatalogError, match="duplicate registry name"):
        catalog.add(StubRegistry("docker-hub", 2))
    assert 2 not in catalog

class HalfBackend(Registry):
    name = "half"
    option = 1

    def read_interactive(self):
        self.repository = "docker.io/half"


def test_backend_missing_hooks_cannot_be_registered():
    catalog = Catalog()
    with pytest.raises(TypeError, match="abstract"):
        catalog.add(HalfBackend())
    assert catalog.find("half") is None

def test_catalog_iterates_in_option_order():
    catalog = Catalog()
    for name, option in (("c", 3), ("a", 1), ("b", 2)):
        catalog.add(StubRegistry(name, option))
    assert [r.name for r in catalog] == ["a", "b", "c"]
    assert catalog.names() == ["a", "b", "c"]


def test_choose_registry_interactive_lists_sorted_options(answers, capsys):
    catalog = Catalog()
    catalog.add(StubRegistry("harbor", 2, caption="Harbor"))
    catalog.add(StubRegistry("docker-hub", 1, caption="Docker Hub"))
    answers("2")

    selection = choose_registry_interactive(catalog)

    assert selection.option == 2
    assert selection.name == "harbor"
    out = capsys.readouterr().out
    assert out.index("1: Docker Hub") < out.index("2: Harbor")
    assert out.startswith("Choose registry type:")

@pytest.mark.parametrize("answer", ["0", "3", "abc", ""])
def test_choose_registry_interactive_rejects_invalid_choice(answers, answer):
    catalog = Catalog()
    catalog.add(StubRegistry("docker-hub", 1))
    catalog.add(StubRegistry("harbor", 2))
    answers(answer)
    with pytest.raises(InvalidSelectionError, match="Error reading registry type"):
        choose_registry_interactive(catalog)

def test_choose_registry_interactive_empty_catalog():
    with pytest.raises(InvalidSelectionError):
        choose_registry_interactive(Catalog())


def test_set_registry(docker_hub_catalog):
    selection = set_registry("docker-hub", docker_hub_catalog)
    assert selection == Selection(1, docker_hub_catalog.get(1))

def test_set_registry_unknown_name(docker_hub_catalog):
    previous = set_registry("docker-hub", docker_hub_catalog)
    with pytest.raises(InvalidSelectionError, match="Invalid registry type: x") as excinfo:
        set_registry("x", docker_hub_catalog)
    assert "docker-hub" in excinfo.value.hint
    assert previous.name == "docker-hub"


def test_read_inputs_dispatch(docker_hub_catalog):
    selection = set_registry("docker-hub", docker_hub_catalog)
    read_inputs_interactive(selection)
    assert selection.registry.read_with is None
    assert selection.registry.repository == "docker.io/interactive"

    flags = {"repository": FlagValue("docker.io/team", True)}
    read_inputs_from_flags(selection, flags)
    assert selection.registry.read_with is flags
    assert selection.registry.repository == "docker.io/team"


def test_validate_flags_success(docker_hub_catalog):
    selection = set_registry("docker-hub", docker_hub_catalog)
    validate_flags(selection, {"username": PROVIDED, "password": PROVIDED})
    validate_flags(selection, {"username": PROVIDED, "password": PROVIDED, "url": PROVIDED})
    validate_flags(selection, {"username": PROVIDED, "password": PROVIDED, "key-file": ABSENT})

def test_validate_flags_missing_required(docker_hub_catalog):
    selection = set_registry("docker-hub", docker_hub_catalog)
    with pytest.raises(FlagValidationError, match="Required flag is missing in batch mode. Flag: password") as excinfo:
        validate_flags(selection, {"username": PROVIDED})
    assert excinfo.value.flag == "password"

def test_validate_flags_required_but_not_provided(docker_hub_catalog):
    selection = set_registry("docker-hub", docker_hub_catalog)
    with pytest.raises(FlagValidationError) as excinfo:
        validate_flags(selection, {"username": PROVIDED, "password": ABSENT})
    assert excinfo.value.flag == "password"

def test_validate_flags_unsupported():
    catalog = Catalog()
    catalog.add(StubRegistry("abc", 1, required={"a", "b"}, optional={"c"}))
    selection = set_registry("abc", catalog)

    with pytest.raises(FlagValidationError) as excinfo:
        validate_flags(selection, {"a": PROVIDED})
    assert excinfo.value.flag == "b"

    with pytest.raises(FlagValidationError, match="not supported flag found in batch mode. Flag: d") as excinfo:
        validate_flags(selection, {"a": PROVIDED, "b": PROVIDED, "d": PROVIDED})
    assert excinfo.value.flag == "d"

    validate_flags(selection, {"a": PROVIDED, "b": PROVIDED})
    validate_flags(selection, {"a": PROVIDED, "b": PROVIDED, "c": PROVIDED})

def test_validate_flags_missing_required_reported_first():
    catalog = Catalog()
    catalog.add(StubRegistry("abc", 1, required={"a", "b"}))
    selection = set_registry("abc", catalog)
    with pytest.raises(FlagValidationError) as excinfo:
        validate_flags(selection, {"a": PROVIDED, "d": PROVIDED})
    assert excinfo.value.flag == "b"


def test_update_ctrl_config_preserves_other_keys(kube):
    update_ctrl_config(kube, "harbor", "harbor.example.com/apis")

    assert kube.calls == [
        ("get", "configmap", "controller-config", "wso2-system"),
        ("apply", "ConfigMap", "controller-config"),
    ]
    applied = kube.applied[0]
    assert applied["data"]["registryType"] == "harbor"
    assert applied["data"]["repositoryName"] == "harbor.example.com/apis"
    assert applied["data"]["mgwToolkitImg"] == "wso2am/wso2micro-gw-toolkit:3.2.0"
    assert applied["data"]["kanikoImg"] == "gcr.io/kaniko-project/executor:v0.24.0"
    assert applied["metadata"]["creationTimestamp"] == "2020-05-01T10:00:00Z"
    assert applied["metadata"]["resourceVersion"] == "1234"
    assert applied["apiVersion"] == "v1"

def test_update_ctrl_config_without_data_section():
    kube = FakeKube(config_map_yaml="apiVersion: v1\nkind: ConfigMap\nmetadata:\n  name: controller-config\n")
    update_ctrl_config(kube, "quay", "quay.io/wso2")
    assert kube.applied[0]["data"] == {"registryType": "quay", "repositoryName": "quay.io/wso2"}

def test_update_ctrl_config_operator_not_installed():
    kube = FakeKube(fail_get=True)
    with pytest.raises(ControllerConfigError, match="Error reading controller-config") as excinfo:
        update_ctrl_config(kube, "harbor", "harbor.example.com/apis")
    assert "apictl install api-operator" in excinfo.value.hint
    assert isinstance(excinfo.value.__cause__, KubeCommandError)
    assert kube.applied == []

@pytest.mark.parametrize("text", ["data: [unclosed", "- a\n- b\n", "data: 5\n"])
def test_update_ctrl_config_unreadable(text):
    kube = FakeKube(config_map_yaml=text)
    with pytest.raises(ControllerConfigError, match="Error reading controller-config"):
        update_ctrl_config(kube, "harbor", "harbor.example.com/apis")
    assert kube.applied == []

def test_update_ctrl_config_render_failure(kube, monkeypatch):
    def broken_to_yaml(self):
        raise yaml.YAMLError("cannot represent")

    monkeypatch.setattr(ControllerConfig, "to_yaml", broken_to_yaml)
    with pytest.raises(ControllerConfigError, match="Error rendering controller-config"):
        update_ctrl_config(kube, "harbor", "harbor.example.com/apis")
    assert kube.applied == []

def test_update_ctrl_config_apply_failure():
    kube = FakeKube(fail_apply_kind="ConfigMap")
    with pytest.raises(ControllerConfigError, match="Error creating controller-configs"):
        update_ctrl_config(kube, "harbor", "harbor.example.com/apis")


def test_update_configs_secrets_order(kube, docker_hub_catalog):
    selection = set_registry("docker-hub", docker_hub_catalog)
    read_inputs_interactive(selection)

    update_configs_secrets(selection, kube)

    assert [call[0] for call in kube.calls] == ["get", "apply", "provision"]
    assert kube.applied[0]["data"]["registryType"] == "docker-hub"
    assert kube.applied[0]["data"]["repositoryName"] == "docker.io/interactive"

def test_update_configs_secrets_config_failure_skips_secret(docker_hub_catalog):
    kube = FakeKube(fail_get=True)
    selection = set_registry("docker-hub", docker_hub_catalog)
    read_inputs_interactive(selection)

    with pytest.raises(ControllerConfigError):
        update_configs_secrets(selection, kube)
    assert ("provision", "docker-hub") not in kube.calls

def test_update_configs_secrets_secret_failure_keeps_config(kube, docker_hub_catalog, caplog):
    selection = set_registry("docker-hub", docker_hub_catalog)
    read_inputs_interactive(selection)
    selection.registry.fail_provision = True

    with pytest.raises(KubeCommandError):
        update_configs_secrets(selection, kube)
    assert kube.applied[0]["kind"] == "ConfigMap"
    assert "credentials secret was not created" in caplog.text

def test_update_configs_secrets_requires_repository(kube, docker_hub_catalog):
    selection = set_registry("docker-hub", docker_hub_catalog)
    with pytest.raises(RegistryInputError):
        update_configs_secrets(selection, kube)
    assert kube.calls == []
