"""Config – external secret sources."""

from mp_envkit.config.secrets import KubernetesSecretStore, SecretRef, SecretStore

__all__ = ["KubernetesSecretStore", "SecretRef", "SecretStore"]
