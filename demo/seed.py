#!/usr/bin/env python3
"""
Demo seed script — populates a running server with sample accounts.

!! NOT FOR PRODUCTION !!
This script creates made-up account holders with arbitrary balances. It is
intended ONLY for local demos and frontend development.

Usage:
    # With the API server running on localhost:8080:
    python demo/seed.py

    # Delete the SQLite database file (restart the server to recreate it):
    python demo/seed.py --reset

    # Custom server URL:
    python demo/seed.py --base-url http://localhost:9000

After seeding, one account is renamed and one is deleted so the update
and delete endpoints show up in server logs as well.
"""

import argparse
import asyncio
import os
import sys

import httpx

BASE_URL = "http://localhost:8080"
ACCOUNTS_PATH = "/api/v1/accounts"

# ---------------------------------------------------------------------------
# Demo accounts
# ---------------------------------------------------------------------------

ACCOUNTS = [
    {"accountHolderName": "Alice Chen", "balance": "850.00", "currency": "USD"},
    {"accountHolderName": "Alice Chen", "balance": "5000.00", "currency": "EUR"},
    {"accountHolderName": "Bob Martinez", "balance": "1200.00", "currency": "USD"},
    {"accountHolderName": "Carol Nguyen", "balance": "3200.00", "currency": "GBP"},
    {"accountHolderName": "Dave Johnson", "balance": "75.50", "currency": "CAD"},
    {"accountHolderName": "Erin Patel", "balance": "0.00", "currency": "INR"},
    {"accountHolderName": "Temporary Holder", "balance": "10.00", "currency": "USD"},
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def log(msg: str) -> None:
    print(f"  {msg}")


async def create_account(client: httpx.AsyncClient, body: dict) -> dict:
    resp = await client.post(f"{BASE_URL}{ACCOUNTS_PATH}", json=body)
    resp.raise_for_status()
    return resp.json()


async def update_account(client: httpx.AsyncClient, account_id: int, body: dict) -> dict:
    resp = await client.put(f"{BASE_URL}{ACCOUNTS_PATH}/{account_id}", json=body)
    resp.raise_for_status()
    return resp.json()


async def delete_account(client: httpx.AsyncClient, account_id: int) -> None:
    resp = await client.delete(f"{BASE_URL}{ACCOUNTS_PATH}/{account_id}")
    resp.raise_for_status()


async def seed(base_url: str) -> None:
    global BASE_URL
    BASE_URL = base_url

    print("\n========================================")
    print("  DEMO SEED — NOT FOR PRODUCTION")
    print("========================================\n")

    async with httpx.AsyncClient(timeout=30.0) as client:
        # Health check
        try:
            health = await client.get(f"{BASE_URL}/actuator/health")
            health.raise_for_status()
        except (httpx.ConnectError, httpx.HTTPStatusError):
            print(f"  ERROR: Cannot connect to {BASE_URL}")
            print("  Start the server first: uvicorn banklite.main:app --reload\n")
            sys.exit(1)

        print("Creating accounts...")
        created = []
        for body in ACCOUNTS:
            account = await create_account(client, body)
            created.append(account)
            log(
                f"{account['accountNumber']}  {account['accountHolderName']:<18s} "
                f"{account['balance']:>10s} {account['currency']}"
            )

        print("\nUpdating Bob's account...")
        bob = next(a for a in created if a["accountHolderName"] == "Bob Martinez")
        updated = await update_account(
            client,
            bob["id"],
            {"accountHolderName": "Robert Martinez", "balance": "1350.25", "currency": "USD"},
        )
        log(f"{updated['accountNumber']} now held by {updated['accountHolderName']}")

        print("\nDeleting the temporary account...")
        temporary = created[-1]
        await delete_account(client, temporary["id"])
        log(f"{temporary['accountNumber']} deleted")

        resp = await client.get(f"{BASE_URL}{ACCOUNTS_PATH}")
        resp.raise_for_status()
        remaining = resp.json()

    print("\n========================================")
    print(f"  SEED COMPLETE — {len(remaining)} accounts")
    print("========================================\n")


def reset_database() -> None:
    """Delete the SQLite database file so the server recreates it on restart."""
    db_path = os.path.join(os.path.dirname(__file__), "..", "data", "banklite.db")
    db_path = os.path.normpath(db_path)

    if os.path.exists(db_path):
        os.remove(db_path)
        print(f"\n  Deleted {db_path}")
        print("  Restart the server to recreate empty tables.\n")
    else:
        print(f"\n  No database found at {db_path}\n")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Demo seed script — NOT FOR PRODUCTION",
        epilog="Creates sample accounts for demos.",
    )
    parser.add_argument(
        "--base-url", default="http://localhost:8080",
        help="Base URL of the running API (default: http://localhost:8080)",
    )
    parser.add_argument(
        "--reset", action="store_true",
        help="Delete the database file and exit (restart server to recreate)",
    )
    args = parser.parse_args()

    if args.reset:
        reset_database()
        return

    await seed(args.base_url)


if __name__ == "__main__":
    asyncio.run(main())
