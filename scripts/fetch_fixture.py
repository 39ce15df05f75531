import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
import json
import os
from typing import Any

from dotenv import load_dotenv

from guesty_report.dependencies import get_guesty_client

load_dotenv()


# === FIXTURE SAVE ===


def save_fixture(data: Any, filename: str) -> None:
    os.makedirs("tests/fixtures", exist_ok=True)
    path = f"tests/fixtures/{filename}"
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"Saved {filename} ({len(data) if isinstance(data, list) else 'dict'})")


# === Master fetch ===


def fetch_all_fixtures(raw: bool) -> None:
    client = get_guesty_client()

    if raw:
        save_fixture(client.fetch("/listings", params={"limit": 100}), "guesty_listings_raw.json")
        save_fixture(
            client.fetch("/reservations", params={"limit": 100, "sort": "-checkIn"}),
            "guesty_reservations_raw.json",
        )
        return

    save_fixture(client.fetch_listings(), "guesty_listings.json")
    save_fixture(client.fetch_reservations(), "guesty_reservations.json")


# === CLI ===

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fetch and save Guesty API fixtures.")
    parser.add_argument(
        "--raw", action="store_true", help="Save full response bodies instead of 'results' arrays"
    )
    args = parser.parse_args()

    fetch_all_fixtures(args.raw)
