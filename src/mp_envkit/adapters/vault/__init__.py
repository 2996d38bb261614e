"""HashiCorp Vault adapter – secret store."""
from mp_envkit.adapters.vault.store import VaultSecretStore

__all__ = ["VaultSecretStore"]
