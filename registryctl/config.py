"""Configuration management for the registryctl application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # Cluster access
    KUBECTL: str = os.getenv("KUBECTL", "kubectl")
    KUBE_BACKEND: str = os.getenv("REGISTRYCTL_KUBE_BACKEND", "kubectl").lower()
    KUBECONFIG: str = os.getenv("KUBECONFIG", "")
    KUBECTL_TIMEOUT: int = int(os.getenv("KUBECTL_TIMEOUT", "60"))

    # API operator controller config
    CONTROLLER_NAMESPACE: str = os.getenv("CONTROLLER_NAMESPACE", "wso2-system")
    CONTROLLER_CONFIG_MAP: str = os.getenv("CONTROLLER_CONFIG_MAP", "controller-config")
    CTRL_CONFIG_REG_TYPE_KEY: str = os.getenv("CTRL_CONFIG_REG_TYPE_KEY", "registryType")
    CTRL_CONFIG_REG_KEY: str = os.getenv("CTRL_CONFIG_REG_KEY", "repositoryName")

    # Registry credential secrets
    CREDENTIALS_NAMESPACE: str = os.getenv("CREDENTIALS_NAMESPACE", CONTROLLER_NAMESPACE)

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Security
    REDACT_KEYS: tuple = ("password", "secret", "token", "key-file")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        if cls.KUBE_BACKEND not in ("kubectl", "api"):
            raise ValueError(
                f"Invalid REGISTRYCTL_KUBE_BACKEND: {cls.KUBE_BACKEND} (expected 'kubectl' or 'api')"
            )
        missing = [k for k in ("CONTROLLER_NAMESPACE", "CONTROLLER_CONFIG_MAP") if not getattr(cls, k)]
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")

# Don't validate on import to allow for dynamic configuration
# Call Config.validate() explicitly when needed
