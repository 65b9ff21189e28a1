"""Configuration schema and loading system for catalogs and racks.

Public API:
    - CatalogConfiguration: Root model of a catalog file
    - RackConfiguration: Root model of a rack file
    - ChassisTypeConfig, CardConfig, PartNumberConfigSchema: Catalog records
    - RackCardConfig: One card selection in a rack file
    - load_catalog / load_catalog_from_dict: Load a catalog
    - load_rack_config / load_rack_config_from_dict: Load a rack file
    - ConfigError: Exception for configuration errors
    - config_to_*: Convert configuration models to domain value objects

Example:
    >>> from pathlib import Path
    >>> from rackbuilder.application.config import load_rack_config, ConfigError
    >>>
    >>> try:
    ...     rack = load_rack_config(Path("my-rack.json"))
    ...     print(f"Chassis: {rack.chassis_type}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from rackbuilder.application.config.adapter import (
    config_to_card,
    config_to_chassis_type,
    config_to_part_number_config,
)
from rackbuilder.application.config.loader import (
    ConfigError,
    load_catalog,
    load_catalog_from_dict,
    load_rack_config,
    load_rack_config_from_dict,
)
from rackbuilder.application.config.schema import (
    SUPPORTED_VERSIONS,
    CardConfig,
    CatalogConfiguration,
    ChassisTypeConfig,
    PartNumberConfigSchema,
    RackCardConfig,
    RackConfiguration,
)

__all__ = [
    "CardConfig",
    "CatalogConfiguration",
    "ChassisTypeConfig",
    "ConfigError",
    "PartNumberConfigSchema",
    "RackCardConfig",
    "RackConfiguration",
    "SUPPORTED_VERSIONS",
    "config_to_card",
    "config_to_chassis_type",
    "config_to_part_number_config",
    "load_catalog",
    "load_catalog_from_dict",
    "load_rack_config",
    "load_rack_config_from_dict",
]
