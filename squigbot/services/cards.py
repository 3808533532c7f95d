"""Trading-card data for a single Squig: traits, rarity and OpenSea rank."""

import json
import logging
from pathlib import Path

import httpx

from .. import config
from .collections import SQUIGS
from .upstream import UpstreamError, get_with_retry, json_payload

log = logging.getLogger(__name__)

TRAIT_GROUPS = ("Background", "Body", "Eyes", "Head", "Legend", "Skin", "Special", "Type")

RARITY_COLORS = {
    "mythic": "#7C3AED",
    "legendary": "#F59E0B",
    "rare": "#3B82F6",
    "uncommon": "#10B981",
}
DEFAULT_RARITY_COLOR = "#9CA3AF"


def nft_attributes(nft: dict) -> list:
    """``metadata.attributes``, falling back to ``raw.metadata`` which may be a JSON string."""
    metadata = nft.get("metadata") or {}
    if isinstance(metadata, dict) and isinstance(metadata.get("attributes"), list):
        return metadata["attributes"]

    raw_metadata = (nft.get("raw") or {}).get("metadata")
    if isinstance(raw_metadata, str):
        try:
            raw_metadata = json.loads(raw_metadata)
        except json.JSONDecodeError:
            return []
    if isinstance(raw_metadata, dict) and isinstance(raw_metadata.get("attributes"), list):
        return raw_metadata["attributes"]
    return []


def simple_rarity_label(attributes: list) -> str:
    count = len(attributes)
    if count >= 9:
        return "Mythic"
    if count >= 7:
        return "Legendary"
    if count >= 5:
        return "Rare"
    if count >= 3:
        return "Uncommon"
    return "Common"


def rarity_color(label: str | None) -> str:
    return RARITY_COLORS.get((label or "").lower(), DEFAULT_RARITY_COLOR)


def normalize_traits(attributes: list) -> dict[str, list[dict]]:
    """Groups attributes by trait type; the fixed groups always appear, unknown types are kept."""
    groups: dict[str, list[dict]] = {group: [] for group in TRAIT_GROUPS}
    for attribute in attributes:
        if not isinstance(attribute, dict):
            continue
        trait_type = str(attribute.get("trait_type") or "").strip()
        value = attribute.get("value")
        if not trait_type or value is None:
            continue
        groups.setdefault(trait_type, []).append({"trait_type": trait_type, "value": value})
    return groups


def load_trait_counts(path: str | Path) -> dict[str, dict[str, int]]:
    """Reads the batch job's output; a missing or unreadable file counts as empty."""
    path = Path(path)
    if not path.exists():
        return {}
    try:
        counts = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning(f"Ignoring trait counts at {path}: {e}")
        return {}
    return counts if isinstance(counts, dict) else {}


async def fetch_nft_metadata(
        client: httpx.AsyncClient, token_id: int, contract: str = SQUIGS.contract
) -> dict:
    url = f"{config.ALCHEMY_URL}/{config.ALCHEMY_API_KEY}/getNFTMetadata"
    params = {"contractAddress": contract, "tokenId": token_id, "refreshCache": "false"}
    payload = json_payload(await get_with_retry(client, url, params))
    if not isinstance(payload, dict):
        raise UpstreamError(f"Unexpected Alchemy response: {payload}")
    return payload


async def fetch_opensea_rank(
        client: httpx.AsyncClient, token_id: int, contract: str = SQUIGS.contract
) -> dict | None:
    url = f"{config.OPENSEA_URL}/chain/ethereum/contract/{contract}/nfts/{token_id}"
    response = await get_with_retry(
        client, url, headers={"X-API-KEY": config.OPENSEA_API_KEY}, retries=2, delay=0.5
    )
    payload = json_payload(response)
    if not isinstance(payload, dict):
        return None

    rarity = payload.get("rarity") or (payload.get("nft") or {}).get("rarity") \
        or (payload.get("item") or {}).get("rarity")
    if not isinstance(rarity, dict):
        return None
    rank = rarity.get("rank") or rarity.get("ranking")
    if not rank:
        return None
    return {
        "rank": rank,
        "score": rarity.get("score"),
        "percentile": rarity.get("percentile"),
        "total": rarity.get("max_rank") or rarity.get("collection_size"),
    }
