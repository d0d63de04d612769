"""
Supported assets and collateral tokens.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..cache import ResourceKind
from ..constants import ASSETS
from ..models import Asset
from .base import ResourceService


@dataclass(frozen=True)
class AssetsSummary:
    total_assets: int
    unique_decimals: List[int]
    assets_by_decimals: Dict[int, int]
    newest_asset: Optional[Asset]
    oldest_asset: Optional[Asset]


class AssetService(ResourceService):
    
    async def get_assets(self) -> Tuple[Asset, ...]:
        return await self._cached(
            ResourceKind.ASSETS,
            ASSETS,
            lambda payload: tuple(Asset.model_validate(item) for item in payload),
            self._ttl.assets,
        )
    
    async def get_asset_by_symbol(self, symbol: str) -> Optional[Asset]:
        assets = await self.get_assets()
        wanted = symbol.lower()
        return next((a for a in assets if a.short.lower() == wanted), None)
    
    async def get_asset_by_address(self, address: str) -> Optional[Asset]:
        assets = await self.get_assets()
        wanted = address.lower()
        return next((a for a in assets if a.address.lower() == wanted), None)
    
    async def search_assets(self, query: str) -> List[Asset]:
        assets = await self.get_assets()
        q = query.lower()
        return [
            a for a in assets
            if q in a.name.lower() or q in a.short.lower() or q in a.address.lower()
        ]
    
    async def get_assets_summary(self) -> AssetsSummary:
        assets = await self.get_assets()
        
        by_decimals: Dict[int, int] = {}
        for asset in assets:
            by_decimals[asset.decimals] = by_decimals.get(asset.decimals, 0) + 1
        
        # ISO timestamps sort chronologically as strings
        dated = sorted((a for a in assets if a.created_at), key=lambda a: a.created_at)
        
        return AssetsSummary(
            total_assets=len(assets),
            unique_decimals=sorted(by_decimals),
            assets_by_decimals=by_decimals,
            newest_asset=dated[-1] if dated else None,
            oldest_asset=dated[0] if dated else None,
        )
