"""Tally trait values across the whole Squigs collection into trait_counts.json.

Usage: python -m scripts.build_trait_counts [output_path]
"""

import json
import logging
import sys
from pathlib import Path

import httpx

from squigbot import config
from squigbot.services.cards import nft_attributes
from squigbot.services.collections import SQUIGS

log = logging.getLogger(__name__)

PAGE_SIZE = 100


def tally(nfts: list[dict], counts: dict[str, dict[str, int]]) -> None:
    for nft in nfts:
        for attribute in nft_attributes(nft):
            if not isinstance(attribute, dict):
                continue
            trait_type = str(attribute.get("trait_type") or "").strip()
            value = attribute.get("value")
            value = "" if value is None else str(value)
            if not trait_type or not value:
                continue
            values = counts.setdefault(trait_type, {})
            values[value] = values.get(value, 0) + 1


def fetch_trait_counts(client: httpx.Client, contract: str = SQUIGS.contract) -> dict[str, dict[str, int]]:
    url = f"{config.ALCHEMY_URL}/{config.ALCHEMY_API_KEY}/getNFTsForContract"
    counts: dict[str, dict[str, int]] = {}
    page_key = None

    while True:
        params = {"contractAddress": contract, "withMetadata": "true", "pageSize": PAGE_SIZE}
        if page_key:
            params["pageKey"] = page_key
        response = client.get(url, params=params, timeout=30)
        response.raise_for_status()
        payload = response.json()

        tally(payload.get("nfts") or [], counts)
        page_key = payload.get("pageKey")
        log.info(f"fetched batch, next pageKey = {page_key}")
        if not page_key:
            return counts


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    argv = sys.argv[1:] if argv is None else argv
    output = Path(argv[0]) if argv else Path("trait_counts.json")

    with httpx.Client() as client:
        counts = fetch_trait_counts(client)

    output.write_text(json.dumps(counts, indent=2), encoding="utf-8")
    log.info(f"Wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
