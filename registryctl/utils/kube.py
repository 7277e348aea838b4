import os
from kubernetes import config

def load_kubeconfig(path: str = None) -> str:
    """
    Load cluster credentials for the kubernetes client.

    Tries, in order: the KUBECONFIG_CONTENT env var (CI/CD), an explicit path,
    the default kubeconfig and finally the in-cluster service account.
    Returns a short description of what was loaded.
    """
    # CI/CD secret-based loading
    if "KUBECONFIG_CONTENT" in os.environ:
        temp_path = "/tmp/ci-kubeconfig.yaml"
        with open(temp_path, "w") as f:
            f.write(os.environ["KUBECONFIG_CONTENT"])
        os.chmod(temp_path, 0o600)
        config.load_kube_config(config_file=temp_path)
        return temp_path

    if path:
        resolved = os.path.realpath(os.path.expanduser(path))
        if not os.path.exists(resolved):
            raise FileNotFoundError(f"Kubeconfig not found: {resolved}")
        config.load_kube_config(config_file=resolved)
        return resolved

    try:
        config.load_kube_config()
        return "default kubeconfig"
    except config.ConfigException:
        config.load_incluster_config()
        return "in-cluster config"
