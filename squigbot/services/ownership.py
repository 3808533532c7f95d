import math
from typing import Iterable


def owned_tokens(transfers: Iterable[dict], wallet: str) -> list[str]:
    """Replay transfers in order; token ids keep the order they were first held in."""
    owner = wallet.lower()
    owned: dict[str, None] = {}
    for transfer in transfers:
        token_id = str(transfer.get("tokenID", ""))
        if str(transfer.get("to", "")).lower() == owner:
            owned[token_id] = None
        elif str(transfer.get("from", "")).lower() == owner:
            owned.pop(token_id, None)
    return list(owned)


def paginate(tokens: list[str], page: int, per_page: int = 5) -> tuple[list[str], int, int]:
    """Returns the tokens on ``page`` (clamped into range), the page used and the page count."""
    total_pages = max(1, math.ceil(len(tokens) / per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return tokens[start:start + per_page], page, total_pages
