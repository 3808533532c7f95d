import httpx

from .. import config
from .upstream import RETRY_DELAY, UpstreamError, get_with_retry, json_payload


class EtherscanError(UpstreamError):
    pass


async def fetch_token_transfers(
        wallet: str,
        contract: str,
        client: httpx.AsyncClient | None = None,
        delay: float | None = None,
) -> list[dict]:
    """ERC-721 transfers touching ``wallet`` for one contract, oldest first."""
    delay = RETRY_DELAY if delay is None else delay
    params = {
        "module": "account",
        "action": "tokennfttx",
        "address": wallet,
        "contractaddress": contract,
        "page": 1,
        "offset": 100,
        "sort": "asc",
        "apikey": config.ETHERSCAN_API_KEY,
    }
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await get_with_retry(own_client, config.ETHERSCAN_URL, params, delay=delay)
        else:
            response = await get_with_retry(client, config.ETHERSCAN_URL, params, delay=delay)
        payload = json_payload(response)
    except UpstreamError as e:
        raise EtherscanError(str(e)) from e

    result = payload.get("result") if isinstance(payload, dict) else None
    if not isinstance(result, list):
        raise EtherscanError(f"Unexpected Etherscan response: {payload}")
    return result
