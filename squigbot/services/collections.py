from dataclasses import dataclass


@dataclass(frozen=True)
class NftCollection:
    key: str
    title: str
    contract: str
    image_template: str
    on_opensea: bool = False

    def image_url(self, token_id: str) -> str:
        return self.image_template.format(token_id=token_id)

    def opensea_url(self, token_id: str) -> str | None:
        if not self.on_opensea:
            return None
        return f"https://opensea.io/assets/ethereum/{self.contract}/{token_id}"


UGLY = NftCollection(
    key="ugly",
    title="Charm of the Ugly",
    contract="0x9492505633d74451bdf3079c09ccc979588bc309",
    image_template="https://ipfs.io/ipfs/bafybeie5o7afc4yxyv3xx4jhfjzqugjwl25wuauwn3554jrp26mlcmprhe/{token_id}",
)
MONSTER = NftCollection(
    key="monster",
    title="Ugly Monster",
    contract="0x1cD7fe72D64f6159775643ACEdc7D860dFB80348",
    image_template="https://gateway.pinata.cloud/ipfs/bafybeicydaui66527mumvml5ushq5ngloqklh6rh7hv3oki2ieo6q25ns4/{token_id}.webp",
)
SQUIGS = NftCollection(
    key="squigs",
    title="Squigs",
    contract="0x9bf567ddf41b425264626d1b8b2c7f7c660b1c42",
    image_template="https://assets.bueno.art/images/a49527dc-149c-4cbc-9038-d4b0d1dbf0b2/default/{token_id}",
    on_opensea=True,
)

COLLECTIONS: dict[str, NftCollection] = {c.key: c for c in (UGLY, MONSTER, SQUIGS)}
