"""Typed view over the API operator's controller config map."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml
from jsonschema import validate, ValidationError

from .config import Config

class _ConfigMapLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps such as creationTimestamp as strings."""


_ConfigMapLoader.yaml_implicit_resolvers = {
    key: [r for r in resolvers if r[0] != "tag:yaml.org,2002:timestamp"]
    for key, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

CONFIG_MAP_SCHEMA = {
    "type": "object",
    "properties": {
        "apiVersion": {"type": "string"},
        "kind": {"type": "string"},
        "metadata": {"type": "object"},
        "data": {"type": ["object", "null"]},
    },
}


@dataclass
class ControllerConfig:
    """The registry settings of the controller config map.

    ``document`` holds the whole config map as decoded from YAML so that keys
    this tool does not know about survive a read/modify/write cycle.
    """
    registry_type: Optional[str] = None
    repository: Optional[str] = None
    document: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, text: str) -> "ControllerConfig":
        """Decode a config map.

        Raises:
            yaml.YAMLError: If the text is not valid YAML
            ValueError: If the document is not a config map shaped mapping
        """
        document = yaml.load(text, Loader=_ConfigMapLoader)
        if document is None:
            document = {}
        try:
            validate(instance=document, schema=CONFIG_MAP_SCHEMA)
        except ValidationError as ve:
            raise ValueError(f"Invalid config map: {ve.message}") from ve

        data = document.get("data") or {}
        return cls(
            registry_type=data.get(Config.CTRL_CONFIG_REG_TYPE_KEY),
            repository=data.get(Config.CTRL_CONFIG_REG_KEY),
            document=document,
        )

    def to_document(self) -> Dict[str, Any]:
        document = dict(self.document)
        data = dict(document.get("data") or {})
        if self.registry_type is not None:
            data[Config.CTRL_CONFIG_REG_TYPE_KEY] = self.registry_type
        if self.repository is not None:
            data[Config.CTRL_CONFIG_REG_KEY] = self.repository
        document["data"] = data
        return document

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_document(), default_flow_style=False, sort_keys=False)
