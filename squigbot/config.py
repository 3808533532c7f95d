from dotenv import load_dotenv

import os

load_dotenv()

SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
REDIS_URL = os.getenv("REDIS_URL", "memory://")

DEV = os.environ.get("DEV", "true").lower() == "true"
SQLITE_URL = os.environ.get("SQLITE_URL", "sqlite:///./squigbot.db")
POSTGRES_URL = os.environ.get("POSTGRES_URL")

ETHERSCAN_API_KEY = os.environ.get("ETHERSCAN_API_KEY", "")
ETHERSCAN_URL = os.environ.get("ETHERSCAN_URL", "https://api.etherscan.io/api")
ALCHEMY_API_KEY = os.environ.get("ALCHEMY_API_KEY", "")
ALCHEMY_URL = os.environ.get("ALCHEMY_URL", "https://eth-mainnet.g.alchemy.com/nft/v3")
OPENSEA_API_KEY = os.environ.get("OPENSEA_API_KEY", "")
OPENSEA_URL = os.environ.get("OPENSEA_URL", "https://api.opensea.io/api/v2")
TRAIT_COUNTS_PATH = os.environ.get("TRAIT_COUNTS_PATH", "trait_counts.json")

# one chat message in CHARM_ODDS drops $CHARM
CHARM_ODDS = int(os.environ.get("CHARM_ODDS", "200"))

# Squig Roulette defaults, overridable per round
ROULETTE_DURATION_MS = int(os.environ.get("ROULETTE_DURATION_MS", "30000"))
ROULETTE_REMINDER_OFFSETS_MS = tuple(
    int(offset)
    for offset in os.environ.get("ROULETTE_REMINDER_OFFSETS_MS", "10000,20000").split(",")
    if offset.strip()
)
ROULETTE_DOMAIN_SIZE = int(os.environ.get("ROULETTE_DOMAIN_SIZE", "6"))
ROULETTE_POINT_AWARD = int(os.environ.get("ROULETTE_POINT_AWARD", "2"))
