"""
Declarative topic matching for resource actions.

A keyword entry is either a substring or a tuple of substrings that must all
be present. Matching is case-insensitive.
"""
from typing import Dict, Sequence, Tuple, Union

from ..cache import ResourceKind

Keyword = Union[str, Tuple[str, ...]]

CRYPTO_SYMBOLS = (
    "btc", "bitcoin", "eth", "ethereum", "sol", "solana", "usdc", "usdt",
    "hype", "doge", "ada", "matic", "avax", "link", "uni", "aave",
)

TOPIC_KEYWORDS: Dict[ResourceKind, Sequence[Keyword]] = {
    ResourceKind.PRICES: (
        # English
        "price", "cost", "worth", "value", "trading", "market", "quote",
        "how much",
        # Russian
        "цена", "стоимость", "сколько стоит", "цену", "цены", "прайс",
        "что стоит", "стоит", "сколько", "торги", "котировки",
        "reya",
    ) + CRYPTO_SYMBOLS,
    ResourceKind.MARKETS: (
        "market", "trading", "pair", "volume", "reya",
        "рынок", "рынки", "торги", "объем",
    ),
    ResourceKind.ASSETS: (
        "asset", "token", "contract", "supported", "collateral", "usdc", "usdt",
        ("what", "available"),
        "актив", "токен",
    ),
}

# Broad net for the dispatch action: anything that may concern Reya at all
REYA_RELATED_KEYWORDS: Sequence[Keyword] = (
    "reya", "рейя",
    "rusd", "srusd", "btc", "eth", "sol", "usdc", "usdt",
    "цена", "price", "стоимость", "market", "рынок", "торги",
    "актив", "asset", "токен", "token",
    "что такое", "what is", "как работает", "how does",
    "perpetual", "перпетуал", "margin", "маржа",
    "liquidation", "ликвидация", "funding", "фандинг",
    "деривативы", "derivatives", "futures", "фьючерсы",
    "dex", "децентрализованная", "decentralized",
)


def _keyword_matches(keyword: Keyword, text: str) -> bool:
    if isinstance(keyword, tuple):
        return all(part in text for part in keyword)
    return keyword in text


def matches_keywords(keywords: Sequence[Keyword], message_text: str) -> bool:
    """
    Check whether any keyword entry occurs in the message.
    
    :param keywords: Keyword entries
    :param message_text: Raw message text
    :return: True on the first matching entry
    """
    text = (message_text or "").lower()
    return any(_keyword_matches(keyword, text) for keyword in keywords)


def matches_topic(resource_kind: ResourceKind, message_text: str) -> bool:
    """
    Check whether a message is about the given resource.
    
    :param resource_kind: ResourceKind with an entry in TOPIC_KEYWORDS
    :param message_text: Raw message text
    :return: True if any topic keyword occurs
    """
    return matches_keywords(TOPIC_KEYWORDS[resource_kind], message_text)
