import httpx
import pytest

from app.catalog.filters import FilterSpec
from app.client import RentalApiClient


def mock_client(payload) -> RentalApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    http = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(handler))
    return RentalApiClient(http_client=http)


def test_fetch_properties_accepts_bare_array():
    client = mock_client([{"id": "a", "title": "A", "price": 10}])

    listings, total = client.fetch_properties()

    assert [listing.id for listing in listings] == ["a"]
    assert total == 1


def test_fetch_properties_prefers_pagination_total():
    client = mock_client(
        {"properties": [{"id": "a", "title": "A"}], "pagination": {"total": 42}}
    )

    listings, total = client.fetch_properties()

    assert len(listings) == 1
    assert total == 42


def test_fetch_properties_without_numeric_total():
    client = mock_client({"properties": [{"id": "a"}, {"id": "b"}], "pagination": {}})
    _, total = client.fetch_properties()
    assert total == 2


def test_fetch_properties_unexpected_payload():
    client = mock_client({"message": "Frontend not available"})
    assert client.fetch_properties() == ([], 0)


def test_fetch_properties_sends_prefilters_only():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=[])

    http = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(handler))
    client = RentalApiClient(http_client=http)

    client.fetch_properties(
        FilterSpec(location="Rome", price_max=100, category="Villa"),
        property_type="Amazing",
    )

    assert seen == {"location": "Rome", "propertyType": "Amazing views"}


def test_errors_are_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "Something went wrong!"})

    http = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(handler))
    client = RentalApiClient(http_client=http)

    with pytest.raises(httpx.HTTPStatusError):
        client.toggle_wishlist("L1")


@pytest.mark.integration
def test_browse_and_wishlist_against_app(client, user, make_auth_headers, create_sample_listings):
    token = make_auth_headers(user.id)["Authorization"].removeprefix("Bearer ")
    api = RentalApiClient(token=token, http_client=client)

    results = api.browse(FilterSpec(category="all", price_max=100, sort="price-high-low"))
    assert [listing.id for listing in results] == ["p3", "p1"]

    assert api.toggle_wishlist("p3") == ["p3"]
    assert [listing.title for listing in api.get_wishlist()] == ["Lake Cabin"]
    assert api.toggle_wishlist("p3") == []


def test_close_leaves_injected_client_open():
    api = mock_client([])

    with api:
        api.fetch_properties()

    assert not api.http.is_closed
    api.http.close()


def test_close_shuts_own_client():
    api = RentalApiClient(base_url="http://api.test")
    api.close()
    assert api.http.is_closed
