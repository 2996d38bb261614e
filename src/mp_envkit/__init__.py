"""
mp_envkit – typed configuration values from ordered, pluggable loaders.

Import path convention::

    from mp_envkit.resolver import EnvKit, SchemaEntry
    from mp_envkit.parsers import integer_parser, url_parser
    from mp_envkit.loaders import ProcessEnvLoader, DotEnvConfigLoader
    from mp_envkit.adapters.vault import VaultSecretStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
