"""Tests for HTTP and storage adapters."""

import asyncio
import json
from dataclasses import dataclass, field

import httpx
import pytest

from snack_check.adapters.openai_explanation_client import OpenAIExplanationClient
from snack_check.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from snack_check.adapters.supabase_cache_mirror import SupabaseCacheMirror


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def test_openfoodfacts_client_sends_search_terms() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"products": [{"nutrition_grades": "c"}]})

    transport = httpx.MockTransport(handler)
    client = HttpxOpenFoodFactsClient(
        base_url="https://off.test",
        user_agent="SnackCheck/test",
        http_client=httpx.AsyncClient(transport=transport),
    )

    payload = asyncio.run(client.search_products("sea salt", timeout_seconds=8))

    assert payload["products"][0]["nutrition_grades"] == "c"
    request = seen[0]
    assert request.url.path == "/cgi/search.pl"
    assert request.url.params["search_terms"] == "sea salt"
    assert request.url.params["json"] == "1"
    assert request.headers["User-Agent"] == "SnackCheck/test"


def test_openfoodfacts_client_raises_on_server_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    client = HttpxOpenFoodFactsClient(
        base_url="https://off.test",
        user_agent="SnackCheck/test",
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.search_products("sea salt", timeout_seconds=8))


def test_openai_explanation_client_parses_output() -> None:
    output = {"explanation": "x", "health_impact": "neutral", "common_uses": []}
    fake = _FakeOpenAI(json.dumps(output))
    client = OpenAIExplanationClient(client=fake)

    result = asyncio.run(
        client.explain(
            model="gpt-5.2",
            reasoning_effort="low",
            store=False,
            schema={"type": "object"},
            prompt="Explain tamari",
        )
    )

    assert result == output
    payload = fake.responses.last_payload
    assert payload["input"] == "Explain tamari"
    assert "nutrition expert" in payload["instructions"]
    assert payload["reasoning"] == {"effort": "low"}
    assert payload["max_output_tokens"] == 800
    assert payload["text"]["format"]["name"] == "ingredient_explanation"
    assert payload["text"]["format"]["strict"] is True


def test_openai_explanation_client_rejects_empty_output() -> None:
    client = OpenAIExplanationClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.explain(
                model="gpt-5.2",
                reasoning_effort=None,
                store=False,
                schema={"type": "object"},
                prompt="Explain tamari",
            )
        )


@pytest.mark.parametrize("output_text", ['{"explanation": "cut', "[1, 2]"])
def test_openai_explanation_client_rejects_unusable_output(output_text: str) -> None:
    client = OpenAIExplanationClient(client=_FakeOpenAI(output_text))

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.explain(
                model="gpt-5.2",
                reasoning_effort=None,
                store=False,
                schema={"type": "object"},
                prompt="Explain tamari",
            )
        )


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    rows: list[dict[str, object]] = field(default_factory=list)
    last_upsert: dict[str, object] | None = None
    last_conflict: str | None = None
    filters: list[tuple[str, object]] = field(default_factory=list)

    def select(self, *_args) -> "FakeTable":
        return self

    def eq(self, column: str, value: object) -> "FakeTable":
        self.filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def upsert(self, payload: dict[str, object], on_conflict: str = "") -> "FakeTable":
        self.last_upsert = payload
        self.last_conflict = on_conflict
        return self

    def execute(self) -> FakeResponse:
        return FakeResponse(data=self.rows)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable())


def test_supabase_cache_mirror_saves_snapshot() -> None:
    client = FakeSupabaseClient()
    mirror = SupabaseCacheMirror(client)
    entries = [{"key": "ingredient:salt", "ttl_seconds": 60}]

    mirror.save("snackcheck_ingredient_cache", entries)

    table = client.tables["cache_snapshots"]
    assert table.last_upsert["namespace"] == "snackcheck_ingredient_cache"
    assert table.last_upsert["entries"] == entries
    assert table.last_conflict == "namespace"


def test_supabase_cache_mirror_loads_snapshot() -> None:
    client = FakeSupabaseClient()
    entries = [{"key": "ingredient:salt"}]
    client.tables["cache_snapshots"] = FakeTable(rows=[{"entries": entries}])
    mirror = SupabaseCacheMirror(client)

    assert mirror.load("snackcheck_ingredient_cache") == entries
    assert client.tables["cache_snapshots"].filters == [
        ("namespace", "snackcheck_ingredient_cache")
    ]


def test_supabase_cache_mirror_load_missing_returns_none() -> None:
    mirror = SupabaseCacheMirror(FakeSupabaseClient())

    assert mirror.load("snackcheck_ingredient_cache") is None
