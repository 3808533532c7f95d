import logging
import random
from typing import Annotated, AsyncIterator

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..auth import CurrentUser
from ..database import SessionDep
from ..models import WalletLink
from ..schemas import HoldingsPage, TokenItem, WalletLinkRequest, WalletPublic
from ..services import COLLECTIONS, EtherscanError, NftCollection, fetch_token_transfers, owned_tokens, paginate

log = logging.getLogger(__name__)
router = APIRouter(tags=["wallets"])

ITEMS_PER_PAGE = 5


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient() as client:
        yield client


HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def get_collection(collection: str) -> NftCollection:
    nft_collection = COLLECTIONS.get(collection.lower())
    if nft_collection is None:
        raise HTTPException(status_code=404, detail=f"Unknown collection {collection}")
    return nft_collection


def linked_wallet(session, user) -> str:
    link = session.get(WalletLink, user.id)
    if not link:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please link your wallet first",
        )
    return link.address


def token_item(nft_collection: NftCollection, token_id: str) -> TokenItem:
    return TokenItem(
        token_id=token_id,
        image_url=nft_collection.image_url(token_id),
        opensea_url=nft_collection.opensea_url(token_id),
    )


async def load_holdings(client: httpx.AsyncClient, wallet: str, nft_collection: NftCollection) -> list[str]:
    try:
        transfers = await fetch_token_transfers(wallet, nft_collection.contract, client=client)
    except EtherscanError as e:
        log.error(f"Fetch failed ({nft_collection.key}) for {wallet}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error fetching your {nft_collection.title}. Please try again later.",
        )
    return owned_tokens(transfers, wallet)


@router.put("/wallets/me", response_model=WalletPublic)
def link_wallet(request: WalletLinkRequest, session: SessionDep, current_user: CurrentUser):
    link = session.get(WalletLink, current_user.id)
    if link:
        link.address = request.address
    else:
        link = WalletLink(user_id=current_user.id, address=request.address)
    session.add(link)
    session.commit()
    session.refresh(link)
    log.info(f"Linked wallet for {current_user.username}")
    return link


@router.get("/wallets/me", response_model=WalletPublic)
def read_wallet(session: SessionDep, current_user: CurrentUser):
    link = session.get(WalletLink, current_user.id)
    if not link:
        raise HTTPException(status_code=404, detail="No wallet linked")
    return link


@router.get("/holdings/{collection}", response_model=HoldingsPage)
async def read_holdings(
        collection: str,
        session: SessionDep,
        current_user: CurrentUser,
        client: HttpClientDep,
        page: Annotated[int, Query(ge=1)] = 1,
):
    nft_collection = get_collection(collection)
    wallet = linked_wallet(session, current_user)
    tokens = await load_holdings(client, wallet, nft_collection)

    page_tokens, page, total_pages = paginate(tokens, page, ITEMS_PER_PAGE)
    return HoldingsPage(
        collection=nft_collection.key,
        title=nft_collection.title,
        wallet=wallet,
        total=len(tokens),
        page=page,
        total_pages=total_pages,
        items=[token_item(nft_collection, token_id) for token_id in page_tokens],
    )


@router.get("/holdings/{collection}/random", response_model=TokenItem)
async def read_random_holding(
        collection: str,
        session: SessionDep,
        current_user: CurrentUser,
        client: HttpClientDep,
):
    nft_collection = get_collection(collection)
    wallet = linked_wallet(session, current_user)
    tokens = await load_holdings(client, wallet, nft_collection)
    if not tokens:
        raise HTTPException(status_code=404, detail=f"You don't own any {nft_collection.title}.")
    return token_item(nft_collection, random.choice(tokens))
