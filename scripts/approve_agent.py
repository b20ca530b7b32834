#!/usr/bin/env python3
"""Generate an agent key and authorize it with the wallet in HL_PRIVATE_KEY.

Usage:
    python scripts/approve_agent.py
"""
import asyncio
import sys

from config.settings import settings
from core.logger import setup_logging
from execution.exchange_client import ExchangeClient


async def main() -> int:
    if not settings.HL_PRIVATE_KEY:
        print("ERROR: HL_PRIVATE_KEY not set", file=sys.stderr)
        return 1

    setup_logging()
    async with await ExchangeClient.from_settings() as client:
        print(f"Approving agent for {client.address} on {client.network.value}...", file=sys.stderr)
        agent_key, status = await client.approve_agent()

    if not status.is_ok:
        print(f"ERROR: {status.response}", file=sys.stderr)
        return 1

    print(f"HL_AGENT_PRIVATE_KEY={agent_key}")
    print("Done!", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
