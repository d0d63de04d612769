"""
Typed records returned by the Reya trading API.

Field names follow Python conventions; the API's camelCase names are accepted
through aliases and unknown fields are ignored.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ReyaRecord(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


def _as_str(value):
    if value is None:
        return None
    return str(value)


class Market(ReyaRecord):
    id: str
    ticker: str
    asset_pair_id: Optional[str] = None
    mark_price: Optional[float] = None
    is_active: bool = True
    max_leverage: Optional[float] = None
    description: Optional[str] = None
    name: Optional[str] = None
    tick_size_decimals: Optional[int] = None
    priority: Optional[int] = None
    base_asset: Optional[str] = None

    @field_validator("id", "asset_pair_id", mode="before")
    @classmethod
    def coerce_ids(cls, value):
        return _as_str(value)


class MarketData(ReyaRecord):
    market_id: str
    updated_at: Optional[int] = None
    long_oi: Optional[float] = Field(default=None, alias="longOI")
    short_oi: Optional[float] = Field(default=None, alias="shortOI")
    long_skew_percentage: Optional[float] = None
    short_skew_percentage: Optional[float] = None
    open_interest: Optional[float] = None
    funding_rate: Optional[float] = None
    funding_rate_velocity: Optional[float] = None
    last24h_volume: float = Field(default=0.0, alias="last24hVolume")
    price_change24h: Optional[float] = Field(default=None, alias="priceChange24H")
    price_change24h_percentage: Optional[float] = Field(
        default=None, alias="priceChange24HPercentage"
    )
    pool_price: Optional[float] = None
    oracle_price: Optional[float] = None
    prices_updated_at: Optional[int] = None

    @field_validator("market_id", mode="before")
    @classmethod
    def coerce_ids(cls, value):
        return _as_str(value)

    @field_validator("last24h_volume", mode="before")
    @classmethod
    def null_volume_as_zero(cls, value):
        return 0.0 if value is None else value


class Asset(ReyaRecord):
    address: str
    name: str
    short: str
    decimals: int = 18
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    asset_price_contract_id: Optional[str] = Field(default=None, alias="asset_price_contract_id")
    asset_price_usdc_contract_id: Optional[str] = Field(
        default=None, alias="asset_price_usdc_contract_id"
    )


class Price(ReyaRecord):
    """Prices arrive as decimal strings; kept as strings until formatted."""
    market_id: Optional[int] = None
    oracle_price: Optional[str] = None
    pool_price: Optional[str] = None
    price: Optional[str] = None
    updated_at: Optional[int] = None
    asset_pair_id: Optional[str] = None

    @field_validator("oracle_price", "pool_price", "price", "asset_pair_id", mode="before")
    @classmethod
    def coerce_prices(cls, value):
        return _as_str(value)


class FeeTierParameter(ReyaRecord):
    tier_id: str = Field(alias="tier_id")
    taker_fee: str = Field(alias="taker_fee")
    maker_fee: str = Field(alias="maker_fee")
    volume: str = Field(alias="volume")

    @field_validator("tier_id", "taker_fee", "maker_fee", "volume", mode="before")
    @classmethod
    def coerce_fields(cls, value):
        return _as_str(value)


class GlobalFeeParameters(ReyaRecord):
    og_discount: str = Field(alias="og_discount")
    referee_discount: str = Field(alias="referee_discount")
    referrer_rebate: str = Field(alias="referrer_rebate")
    affiliate_referrer_rebate: str = Field(alias="affiliate_referrer_rebate")

    @field_validator(
        "og_discount",
        "referee_discount",
        "referrer_rebate",
        "affiliate_referrer_rebate",
        mode="before",
    )
    @classmethod
    def coerce_fields(cls, value):
        return _as_str(value)
