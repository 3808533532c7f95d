import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, status

from .. import config
from ..schemas import CardDetails, CardTrait, RankInfo, TokenItem
from ..services import (
    SQUIGS,
    UpstreamError,
    fetch_nft_metadata,
    fetch_opensea_rank,
    load_trait_counts,
    nft_attributes,
    normalize_traits,
    rarity_color,
    simple_rarity_label,
)
from .wallets import HttpClientDep, get_collection, token_item

log = logging.getLogger(__name__)
router = APIRouter(tags=["tokens"])

TokenId = Annotated[int, Path(ge=0)]


@router.get("/tokens/{collection}/{token_id}", response_model=TokenItem)
def read_token(collection: str, token_id: TokenId):
    """Any token of a known collection, no wallet needed."""
    return token_item(get_collection(collection), str(token_id))


async def lookup_rank(client, token_id: int) -> RankInfo | None:
    if not config.OPENSEA_API_KEY:
        return None
    try:
        rank = await fetch_opensea_rank(client, token_id)
    except UpstreamError as e:
        log.warning(f"OpenSea rank lookup failed for Squig #{token_id}: {e}")
        return None
    return RankInfo(**rank) if rank else None


@router.get("/cards/{token_id}", response_model=CardDetails)
async def read_card(
        token_id: TokenId,
        client: HttpClientDep,
        name: Annotated[str | None, Query(max_length=64)] = None,
):
    try:
        meta = await fetch_nft_metadata(client, token_id)
    except UpstreamError as e:
        log.error(f"Card metadata fetch failed for Squig #{token_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Something went wrong building that card.",
        )

    attributes = nft_attributes(meta)
    rarity_label = simple_rarity_label(attributes)
    counts = load_trait_counts(config.TRAIT_COUNTS_PATH)
    traits = {
        group: [
            CardTrait(**trait, count=counts.get(group, {}).get(str(trait["value"])))
            for trait in items
        ]
        for group, items in normalize_traits(attributes).items()
    }
    metadata = meta.get("metadata") if isinstance(meta.get("metadata"), dict) else {}

    item = token_item(SQUIGS, str(token_id))
    return CardDetails(
        token_id=item.token_id,
        name=name or metadata.get("name") or meta.get("name") or f"Squig #{token_id}",
        image_url=item.image_url,
        opensea_url=item.opensea_url,
        rarity_label=rarity_label,
        rarity_color=rarity_color(rarity_label),
        rank=await lookup_rank(client, token_id),
        traits=traits,
    )
