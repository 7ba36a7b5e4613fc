"""Static command and asset catalogs."""

from __future__ import annotations

from galscript.catalog.assets import (
    ASSET_EXTENSIONS,
    ASSET_FOLDERS,
    COMMAND_ASSET_TYPES,
    SCENE_EXTENSION,
    AssetType,
)
from galscript.catalog.commands import (
    COMMAND_DOCS,
    COMMAND_NAMES,
    CommandCatalog,
    CommandInfo,
    ParameterInfo,
    default_catalog,
)

__all__ = [
    "ASSET_EXTENSIONS",
    "ASSET_FOLDERS",
    "COMMAND_ASSET_TYPES",
    "COMMAND_DOCS",
    "COMMAND_NAMES",
    "SCENE_EXTENSION",
    "AssetType",
    "CommandCatalog",
    "CommandInfo",
    "ParameterInfo",
    "default_catalog",
]
