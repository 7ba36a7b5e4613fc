"""Asset discovery."""

from galscript.assets.scanner import AssetInfo, AssetScanner

__all__ = ["AssetInfo", "AssetScanner"]
