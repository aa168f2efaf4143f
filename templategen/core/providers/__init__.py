"""
Descriptor providers — turn descriptor files into generation inputs.

    from templategen.core.providers import ProviderRegistry, default_registry
"""

from templategen.core.providers.base import (
    DescriptorProvider,
    ProvidedProperties,
    StructuredDataProvider,
)
from templategen.core.providers.json_provider import JsonDescriptorProvider
from templategen.core.providers.registry import (
    ProviderRegistry,
    default_registry,
    file_extension,
)
from templategen.core.providers.yaml_provider import YamlDescriptorProvider

__all__ = [
    "DescriptorProvider",
    "JsonDescriptorProvider",
    "ProvidedProperties",
    "ProviderRegistry",
    "StructuredDataProvider",
    "YamlDescriptorProvider",
    "default_registry",
    "file_extension",
]
