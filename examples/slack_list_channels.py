#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os

from laakhay.paging import HTTPClient, HTTPOperation, PaginationIteratorFactory

# Slack returns an empty next_cursor on the last page
FACTORY = PaginationIteratorFactory(
    {
        "conversations.list": {
            "input_token": "cursor",
            "output_token": "response_metadata/next_cursor",
            "limit_key": "limit",
            "result_key": "channels",
        }
    }
)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List Slack channels page by page")
    p.add_argument("limit", nargs="?", type=int, default=50, help="total channels to list")
    p.add_argument("--page-size", type=int, default=20)
    p.add_argument("--token", default=os.environ.get("SLACK_TOKEN"))
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    if not args.token:
        raise SystemExit("Set SLACK_TOKEN or pass --token")

    headers = {"Authorization": f"Bearer {args.token}"}
    async with HTTPClient(base_url="https://slack.com/api", headers=headers) as client:
        operation = HTTPOperation(
            "conversations.list", client, "/conversations.list", params={"limit": 200}
        )
        iterator = FACTORY.build(operation, {"limit": args.limit, "page_size": args.page_size})

        print(f"{'ID':12} | {'Name':30} | {'Members':>7}")
        print("-" * 56)
        async for channel in iterator:
            print(f"{channel['id']:12} | {channel['name']:30} | {channel.get('num_members', 0):>7}")
        print(f"\n{iterator.retrieved_count} channels in {iterator.request_count} requests")


if __name__ == "__main__":
    asyncio.run(main())
