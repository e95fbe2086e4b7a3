from __future__ import annotations

from asset_server.models.asset import Asset, AssetRequest, AssetResponse
from asset_server.models.conditional import AssetStatus, ConditionalContext

__all__ = ["Asset", "AssetRequest", "AssetResponse", "AssetStatus", "ConditionalContext"]
