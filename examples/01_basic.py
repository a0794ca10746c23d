"""
Basic usage - restore a session and call an endpoint
"""
import asyncio
import json
from zcapy import AsyncAPIClient, Credentials, Session, setup_logging


async def main():
    setup_logging()

    # Session and credentials exported from a logged-in web client
    with open("session.json") as f:
        session = Session.from_dict(json.load(f))
    with open("credentials.json") as f:
        credentials = Credentials.from_dict(json.load(f))

    async with AsyncAPIClient(session, credentials) as client:
        result = await client.post(
            "friend",
            "/api/friend/feed/block",
            {"fid": "1234567890", "isBlockFeed": 1, "imei": credentials.imei},
        )

        if result.ok:
            print(f"Done: {result.value!r}")
        else:
            print(f"Failed [{result.error.category.value}:{result.error.code}] "
                  f"{result.error.message}")


if __name__ == "__main__":
    asyncio.run(main())
