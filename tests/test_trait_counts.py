import json

import httpx

from scripts.build_trait_counts import fetch_trait_counts, main, tally


def test_tally_reads_every_metadata_shape() -> None:
    nfts = [
        {"metadata": {"attributes": [{"trait_type": "Eyes", "value": "Spiral"}]}},
        {"raw": {"metadata": json.dumps({"attributes": [{"trait_type": "Eyes", "value": "Spiral"}]})}},
        {"raw": {"metadata": {"attributes": [{"trait_type": " Mouth ", "value": 3}]}}},
        {"raw": {"metadata": "not json"}},
        {"metadata": {"attributes": [{"trait_type": "", "value": "x"}, {"trait_type": "Hat", "value": ""}]}},
    ]
    counts: dict[str, dict[str, int]] = {}

    tally(nfts, counts)

    assert counts == {"Eyes": {"Spiral": 2}, "Mouth": {"3": 1}}


def test_fetch_follows_page_keys() -> None:
    pages = {
        None: {"nfts": [{"metadata": {"attributes": [{"trait_type": "Body", "value": "Blue"}]}}], "pageKey": "p2"},
        "p2": {"nfts": [{"metadata": {"attributes": [{"trait_type": "Body", "value": "Blue"}]}}]},
    }
    requested: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        page_key = request.url.params.get("pageKey")
        requested.append(page_key)
        return httpx.Response(200, json=pages[page_key])

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        counts = fetch_trait_counts(client, contract="0xsquigs")

    assert requested == [None, "p2"]
    assert counts == {"Body": {"Blue": 2}}


def test_main_writes_output(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(
        "scripts.build_trait_counts.fetch_trait_counts", lambda client: {"Eyes": {"Spiral": 1}}
    )
    output = tmp_path / "trait_counts.json"

    assert main([str(output)]) == 0
    assert json.loads(output.read_text()) == {"Eyes": {"Spiral": 1}}
