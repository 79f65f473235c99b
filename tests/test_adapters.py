"""Category adapters against a mocked remote store."""

import httpx
import pytest

from core.entities import Category, FetchStatus, HighlightType
from ingestion.forum import ForumAdapter
from ingestion.market import MarketAdapter
from ingestion.rent import RentAdapter
from ingestion.ride import RideAdapter
from ingestion.team import TeamAdapter
from services.store import StoreSession


def rows_handler(rows, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(200, json=rows)

    return handler


RENT_ROW = {
    "id": "7d0f6c1e-0000-0000-0000-000000000001",
    "title": "Studio Near Campus",
    "location": "Downtown",
    "price": 1450.75,
    "created_at": "2025-09-01T12:00:00+00:00",
    "hot_score": 12.5,
    "highlight_type": "URGENT",
    "highlight_rank": 1,
    "images": [{"url": "https://cdn.test/a.jpg"}, {"url": "https://cdn.test/b.jpg"}],
}


@pytest.mark.asyncio
async def test_rent_projection_and_query(make_store):
    seen = []
    adapter = RentAdapter(make_store(rows_handler([RENT_ROW], seen)))

    outcome = await adapter.fetch()

    assert outcome.status == FetchStatus.OK
    [result] = outcome.results
    assert result.category == Category.RENT
    assert result.id == RENT_ROW["id"]
    assert result.subtitle == "$1450/mo · Downtown"
    assert result.searchable_text == "Studio Near Campus Downtown rent housing"
    assert result.preview_image_url == "https://cdn.test/a.jpg"
    assert result.tier == 1
    assert result.popularity == 12.5
    assert result.highlight == HighlightType.URGENT
    assert result.created_at.year == 2025

    request = seen[0]
    assert request.url.path == "/rest/v1/rent_posts_view"
    assert request.url.params["order"] == "highlight_rank.asc,hot_score.desc,created_at.desc"
    assert request.url.params["limit"] == "80"
    assert request.url.params["select"] == "*"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"


@pytest.mark.asyncio
async def test_explicit_limit_and_session_token(make_store):
    seen = []
    session = StoreSession(user_id="u1", access_token="user-jwt")
    adapter = RentAdapter(make_store(rows_handler([], seen), session=session), limit=25)

    outcome = await adapter.fetch(limit=5)

    assert outcome.status == FetchStatus.OK
    assert outcome.results == ()
    assert seen[0].url.params["limit"] == "5"
    assert seen[0].headers["Authorization"] == "Bearer user-jwt"


@pytest.mark.asyncio
async def test_market_projection(make_store):
    row = {
        "id": "m1", "title": "Used Desk", "category": "furniture", "condition": "Good",
        "price": 40, "created_at": "2025-09-02T08:00:00Z",
    }
    outcome = await MarketAdapter(make_store(rows_handler([row]))).fetch()

    [result] = outcome.results
    assert result.subtitle == "$40 · Good"
    assert result.searchable_text == "Used Desk Good market secondhand furniture"
    assert result.preview_image_url is None


@pytest.mark.parametrize(
    "price, expected",
    [(18.0, "Driver · $18/seat"), (0, "Driver · Flexible"), (None, "Driver · Flexible")],
)
@pytest.mark.asyncio
async def test_ride_projection(make_store, price, expected):
    row = {
        "id": "r1", "departure_location": "Berkeley", "destination_location": "SFO",
        "role": "driver", "price_per_seat": price,
    }
    outcome = await RideAdapter(make_store(rows_handler([row]))).fetch()

    [result] = outcome.results
    assert result.title == "Berkeley → SFO"
    assert result.subtitle == expected
    assert result.searchable_text == "Berkeley SFO driver carpool ride"
    assert result.created_at is None


@pytest.mark.asyncio
async def test_team_subtitle_and_skills(make_store):
    rows = [
        {"id": "t1", "title": "Hackathon squad", "description": "  Need a designer ", "skills_needed": ["figma", "swift"]},
        {"id": "t2", "title": "Study group", "description": "   "},
    ]
    outcome = await TeamAdapter(make_store(rows_handler(rows))).fetch()

    first, second = outcome.results
    assert first.subtitle == "Need a designer"
    assert first.searchable_text == "Hackathon squad Need a designer groups team figma swift"
    assert second.subtitle == "Looking for teammates"
    assert second.searchable_text == "Study group Looking for teammates groups team"


@pytest.mark.asyncio
async def test_forum_subtitle_fallbacks(make_store):
    rows = [
        {"id": "f1", "title": "Best ramen?", "category": "food", "comment_count": 3},
        {"id": "f2", "title": "Library hours", "category": "campus"},
        {"id": "f3", "title": "Lost keys", "category": "help", "description": "Near the gym"},
    ]
    outcome = await ForumAdapter(make_store(rows_handler(rows))).fetch()

    assert [r.subtitle for r in outcome.results] == ["3 comments", "New discussion", "Near the gym"]
    assert outcome.results[0].searchable_text == "Best ramen? 3 comments forum food"


MINIMAL_ROWS = [
    (RentAdapter, {"id": "1", "title": "t", "location": "l", "price": 1}),
    (MarketAdapter, {"id": "1", "title": "t", "category": "c", "condition": "new", "price": 1}),
    (RideAdapter, {"id": "1", "departure_location": "a", "destination_location": "b", "role": "rider"}),
    (TeamAdapter, {"id": "1", "title": "t"}),
    (ForumAdapter, {"id": "1", "title": "t", "category": "c"}),
]


@pytest.mark.parametrize("adapter_type, row", MINIMAL_ROWS)
@pytest.mark.asyncio
async def test_missing_ranking_columns_use_defaults(make_store, adapter_type, row):
    outcome = await adapter_type(make_store(rows_handler([row]))).fetch()

    [result] = outcome.results
    assert result.tier == 2
    assert result.popularity == 0.0
    assert result.highlight == HighlightType.NONE


@pytest.mark.asyncio
async def test_negative_popularity_and_legacy_highlight(make_store):
    row = dict(RENT_ROW, hot_score=-4.0, highlight_type="breaking", highlight_rank=0)
    outcome = await RentAdapter(make_store(rows_handler([row]))).fetch()

    [result] = outcome.results
    assert result.popularity == 0.0
    assert result.tier == 0
    assert result.highlight == HighlightType.FEATURED


@pytest.mark.asyncio
async def test_http_error_degrades_to_failed_outcome(make_store):
    def handler(request):
        return httpx.Response(500, text="boom")

    outcome = await RideAdapter(make_store(handler)).fetch()

    assert outcome.status == FetchStatus.FAILED
    assert outcome.category == Category.RIDE
    assert outcome.results == ()
    assert "500" in outcome.reason


@pytest.mark.asyncio
async def test_transport_error_degrades_to_failed_outcome(make_store):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    outcome = await ForumAdapter(make_store(handler)).fetch()

    assert outcome.status == FetchStatus.FAILED


@pytest.mark.asyncio
async def test_malformed_rows_degrade_to_failed_outcome(make_store):
    outcome = await MarketAdapter(make_store(rows_handler([{"id": "m1", "price": 3}]))).fetch()

    assert outcome.status == FetchStatus.FAILED
    assert outcome.results == ()
