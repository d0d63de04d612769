#!/usr/bin/env python3
"""
Connectivity check and interactive demo for the Reya agent plugin.

Without arguments, hits every Reya API endpoint once through the cached
services and prints a short summary. With --chat, starts a console loop
driven by ReyaAgentApp (needs an LLM API key).
"""
import asyncio
import logging
import sys

from dotenv import load_dotenv

# Imports assume PYTHONPATH=src is set (e.g., PYTHONPATH=src python demo/connectivity_check.py)
from reya_agent.app import ReyaAgentApp
from reya_agent.api import ReyaApiClient
from reya_agent.cache import TTLCache
from reya_agent.config_loader import load_config_from_env
from reya_agent.exceptions import ReyaAgentError
from reya_agent.services import AssetService, FeeService, MarketService, PriceService

# Load environment variables
load_dotenv()


def print_banner(title):
    """Print section banner."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


async def check_endpoints(config):
    """Fetch each resource once and report the outcome."""
    client = ReyaApiClient(config.api_base_url, config.request_timeout_seconds)
    cache = TTLCache()
    markets = MarketService(client, cache, config.cache_ttl)
    prices = PriceService(client, cache, config.cache_ttl)
    assets = AssetService(client, cache, config.cache_ttl)
    fees = FeeService(client, cache, config.cache_ttl)

    async def first_market_data():
        all_markets = await markets.get_markets()
        if not all_markets:
            return "no markets listed"
        data = await markets.get_market_data(all_markets[0].id)
        return f"{all_markets[0].ticker} 24h volume {data.last24h_volume}"

    checks = [
        ("markets", lambda: _count(markets.get_markets())),
        ("markets data", lambda: _count(markets.get_markets_data())),
        ("single market data", first_market_data),
        ("assets", lambda: _count(assets.get_assets())),
        ("prices", lambda: _count(prices.get_prices())),
        ("fee tiers", lambda: _count(fees.get_fee_tiers())),
        ("global fee parameters", lambda: _describe(fees.get_global_fee_parameters())),
    ]

    failures = 0
    try:
        for label, check in checks:
            try:
                result = await check()
                print(f"✅ {label}: {result}")
            except ReyaAgentError as e:
                failures += 1
                print(f"❌ {label}: {e}")
    finally:
        await client.aclose()

    print("-" * 60)
    print(f"{len(checks) - failures}/{len(checks)} endpoints reachable at {config.api_base_url}")
    return failures


async def _count(awaitable):
    items = await awaitable
    return f"{len(items)} records"


async def _describe(awaitable):
    record = await awaitable
    return ", ".join(f"{k}={v}" for k, v in record.model_dump().items())


async def chat_loop(config):
    """Console loop over ReyaAgentApp."""
    app = ReyaAgentApp(config)
    app.initialize()
    print("\nAsk about Reya markets, prices or assets. Type 'quit' to exit.\n")

    try:
        while True:
            try:
                query = input("You: ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\n\n👋 Goodbye!\n")
                break

            if not query:
                continue
            if query.lower() in ['quit', 'exit', 'q']:
                print("\n👋 Goodbye!\n")
                break

            reply = await app.respond(query)
            if reply is None:
                print("💬 (no API action for this message; left to the knowledge base / chat)")
            else:
                print(f"💬 {reply}")
            print("-" * 60)
    finally:
        await app.aclose()


def main():
    """Entry point."""
    try:
        config = load_config_from_env()
    except ReyaAgentError as e:
        print(f"\n❌ Invalid configuration: {e}")
        return 1

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if "--chat" in sys.argv[1:]:
        print_banner("Reya Agent - Interactive Demo")
        try:
            asyncio.run(chat_loop(config))
        except (ReyaAgentError, ImportError, ValueError) as e:
            print(f"\n❌ Failed to initialize: {e}")
            print("Please check your environment variables and configuration.")
            return 1
        return 0

    print_banner("Reya API Connectivity Check")
    failures = asyncio.run(check_endpoints(config))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
