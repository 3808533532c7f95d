import logging

import anyio
import httpx

log = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10.0
RETRIES = 3
RETRY_DELAY = 1.0


class UpstreamError(Exception):
    pass


async def get_with_retry(
        client: httpx.AsyncClient,
        url: str,
        params: dict | None = None,
        headers: dict | None = None,
        retries: int = RETRIES,
        delay: float | None = None,
) -> httpx.Response:
    delay = RETRY_DELAY if delay is None else delay
    for attempt in range(retries):
        try:
            response = await client.get(url, params=params, headers=headers, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            if attempt == retries - 1:
                raise UpstreamError(f"Request to {url} failed after {retries} attempts: {e}") from e
            log.debug(f"Attempt {attempt + 1} to {url} failed: {e}")
            await anyio.sleep(delay)
    raise UpstreamError(f"No attempts made to {url}")


def json_payload(response: httpx.Response):
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamError(f"{response.url} returned invalid JSON: {e}") from e
