"""Configuration providers."""

from sparse_refresh.adapters.configuration.yaml_provider import YamlConfigProvider

__all__ = ["YamlConfigProvider"]
