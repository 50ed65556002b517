"""Asset reference extraction and resolution."""

from notepress.assets.resolver import AssetLookupFailure, AssetResolver, extract_asset_references

__all__ = ["AssetLookupFailure", "AssetResolver", "extract_asset_references"]
