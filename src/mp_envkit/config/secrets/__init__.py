"""Config secrets – SecretStore port and file-mounted backend."""
from mp_envkit.config.secrets.kubernetes import KubernetesSecretStore
from mp_envkit.config.secrets.port import SecretRef, SecretStore

__all__ = ["KubernetesSecretStore", "SecretRef", "SecretStore"]
