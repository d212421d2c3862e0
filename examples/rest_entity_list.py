#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from simaland.api import EntityList, PaginationPolicy, RESTTransport
from simaland.api.entities import ALL_ENTITIES, get_entity


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream records of a paginated entity via REST")
    p.add_argument("entity", nargs="?", default="country", choices=sorted(ALL_ENTITIES))
    p.add_argument("limit", nargs="?", type=int, default=20)
    p.add_argument("--lanes", type=int, default=5)
    p.add_argument("--attempts", type=int, default=3)
    p.add_argument("--delay", type=float, default=5.0)
    p.add_argument("--param", action="append", default=[], metavar="KEY=VALUE")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    params = dict(item.split("=", 1) for item in args.param)
    policy = PaginationPolicy(
        count_lanes=args.lanes,
        max_attempts=args.attempts,
        delay_seconds=args.delay,
    )

    async with RESTTransport() as transport:
        records = EntityList(transport, get_entity(args.entity), policy=policy, query_params=params)
        cursor = records.cursor()
        print("=" * 65)
        async for record in cursor:
            print(f"{cursor.key:6} | {record}")
            if cursor.key + 1 >= args.limit:
                break
        print("=" * 65)
        print(f"Rounds fetched: {cursor.round_count}")


if __name__ == "__main__":
    asyncio.run(main())
