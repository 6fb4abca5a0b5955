import httpx
import pytest

from core.errors import FetchFailed
from core.models import PhotoRecord
from infrastructure.catalog_repository import HttpCatalogSource, parse_catalog

URL = "https://catalog.example/photos"

ROWS = [
    {
        "albumId": 1,
        "id": 1,
        "title": "accusamus beatae ad facilis cum similique qui sunt",
        "url": "https://via.placeholder.com/600/92c952",
        "thumbnailUrl": "https://via.placeholder.com/150/92c952",
    },
    {
        "albumId": 1,
        "id": 2,
        "title": "reprehenderit est deserunt velit ipsam",
        "url": "https://via.placeholder.com/600/771796",
        "thumbnailUrl": "https://via.placeholder.com/150/771796",
    },
]


def source_for(handler) -> HttpCatalogSource:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpCatalogSource(URL, client=client)


def test_fetch_parses_records_in_order():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=ROWS)

    records = source_for(handler).fetch()

    assert seen == [URL]
    assert records == [
        PhotoRecord(
            id=1,
            album_id=1,
            title=ROWS[0]["title"],
            url=ROWS[0]["url"],
            thumbnail_url=ROWS[0]["thumbnailUrl"],
        ),
        PhotoRecord(
            id=2,
            album_id=1,
            title=ROWS[1]["title"],
            url=ROWS[1]["url"],
            thumbnail_url=ROWS[1]["thumbnailUrl"],
        ),
    ]


def test_empty_catalog():
    assert source_for(lambda request: httpx.Response(200, json=[])).fetch() == []


def test_http_error_status_is_fetch_failed():
    with pytest.raises(FetchFailed):
        source_for(lambda request: httpx.Response(500, text="oops")).fetch()


def test_transport_error_is_fetch_failed():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(FetchFailed, match="request failed"):
        source_for(handler).fetch()


def test_invalid_json_is_fetch_failed():
    with pytest.raises(FetchFailed, match="invalid JSON"):
        source_for(lambda request: httpx.Response(200, text="<html>")).fetch()


@pytest.mark.parametrize(
    "payload",
    [
        {"photos": ROWS},
        [ROWS[0], "not an object"],
        [{k: v for k, v in ROWS[0].items() if k != "thumbnailUrl"}],
        [{**ROWS[0], "id": "1"}],
        [{**ROWS[0], "albumId": True}],
        [{**ROWS[0], "title": None}],
        [ROWS[0], {**ROWS[1], "id": 1}],
    ],
)
def test_malformed_payload_is_rejected(payload):
    with pytest.raises(FetchFailed):
        parse_catalog(payload)
