"""Google Container Registry, authenticated with a service account key.

The repository is not asked for: it is gcr.io/<project_id> of the key.
"""
import json
import logging
from pathlib import Path
from typing import Optional

from .. import prompt
from ..errors import RegistryInputError
from ..kube import KubeClient
from ..registry import FLAG_KEY_FILE, FlagValues, Registry
from ..secrets import apply_secret, generic_secret
from ..utils import resolve_file

logger = logging.getLogger("registryctl.registries.gcr")

GCR_SERVER = "gcr.io"
GCR_CREDENTIALS_SECRET = "gcr-cred"
GCR_KEY_FILE_NAME = "gcr_key.json"


class GcrRegistry(Registry):
    name = "gcr"
    caption = "GCR"
    option = 3
    required_flags = frozenset({FLAG_KEY_FILE})

    def __init__(self):
        super().__init__()
        self.key_file: Optional[Path] = None
        self.key_content: Optional[bytes] = None

    def read_interactive(self) -> None:
        self._load_key(prompt.read_value("Enter GCR service account key file"))

    def read_flags(self, flag_values: FlagValues) -> None:
        path = self.flag(flag_values, FLAG_KEY_FILE)
        if not path:
            raise RegistryInputError(f"Empty value for flag: {FLAG_KEY_FILE}")
        self._load_key(path)

    def _load_key(self, path: str) -> None:
        key_file = resolve_file(path, "GCR service account key file")
        content = key_file.read_bytes()
        try:
            key = json.loads(content)
        except ValueError as e:
            raise RegistryInputError(f"Invalid GCR service account key file: {key_file}: {e}") from e
        project_id = key.get("project_id") if isinstance(key, dict) else None
        if not project_id:
            raise RegistryInputError(f"'project_id' not found in GCR service account key file: {key_file}")

        self.key_file = key_file
        self.key_content = content
        self.repository = f"{GCR_SERVER}/{project_id}"
        logger.debug(f"Using GCR repository {self.repository}")

    def provision_credentials(self, kube: KubeClient) -> None:
        if self.key_content is None:
            raise RegistryInputError(f"Service account key is not set for registry type: {self.name}")
        apply_secret(kube, generic_secret(GCR_CREDENTIALS_SECRET, {GCR_KEY_FILE_NAME: self.key_content}))
