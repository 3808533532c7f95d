from .collections import COLLECTIONS, SQUIGS, NftCollection
from .etherscan import EtherscanError, fetch_token_transfers
from .ownership import owned_tokens, paginate
from .upstream import UpstreamError
from .cards import (
    fetch_nft_metadata,
    fetch_opensea_rank,
    load_trait_counts,
    nft_attributes,
    normalize_traits,
    rarity_color,
    simple_rarity_label,
)

__all__ = [
    "COLLECTIONS", "SQUIGS", "NftCollection", "EtherscanError", "fetch_token_transfers",
    "owned_tokens", "paginate", "UpstreamError", "fetch_nft_metadata", "fetch_opensea_rank",
    "load_trait_counts", "nft_attributes", "normalize_traits", "rarity_color", "simple_rarity_label",
]
