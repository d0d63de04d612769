"""
Fee tiers and protocol-wide fee parameters. Rarely change, so cached for an hour by default.
"""
from typing import Tuple

from ..cache import ResourceKind
from ..constants import FEE_TIER_PARAMETERS, GLOBAL_FEE_PARAMETERS
from ..models import FeeTierParameter, GlobalFeeParameters
from .base import ResourceService


class FeeService(ResourceService):
    
    async def get_fee_tiers(self) -> Tuple[FeeTierParameter, ...]:
        return await self._cached(
            ResourceKind.FEE_TIERS,
            FEE_TIER_PARAMETERS,
            lambda payload: tuple(FeeTierParameter.model_validate(item) for item in payload),
            self._ttl.fee_parameters,
        )
    
    async def get_global_fee_parameters(self) -> GlobalFeeParameters:
        return await self._cached(
            ResourceKind.GLOBAL_FEES,
            GLOBAL_FEE_PARAMETERS,
            GlobalFeeParameters.model_validate,
            self._ttl.fee_parameters,
        )
