import asyncio
import json

import httpx
import pytest

from faqih.services.semantic_fallback import (
    SemanticFallback,
    build_knowledge_map,
    get_semantic_fallback,
    parse_match_id,
)


@pytest.fixture
def fatwas(make_fatwa):
    return [
        make_fatwa(id="icu-001", title="موت الدماغ", medical_context="Brain death"),
        make_fatwa(id="surgery-001", title="تجميل الانف", medical_context="Rhinoplasty"),
    ]


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"content": content}}]}


def _fallback(handler, timeout: float = 5.0) -> SemanticFallback:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SemanticFallback(client=client, timeout=timeout)


def test_build_knowledge_map(fatwas):
    entries = build_knowledge_map(fatwas)
    assert [e.id for e in entries] == ["icu-001", "surgery-001"]
    assert entries[0].keywords == "Brain death"
    assert entries[1].title == "تجميل الانف"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"matchId": "icu-001"}', "icu-001"),
        ('{"matchId": null}', None),
        ("```json\n{\"matchId\": \"surgery-001\"}\n```", "surgery-001"),
        ("{}", None),
        ("", None),
        ("   ", None),
        (None, None),
    ],
)
def test_parse_match_id(raw, expected):
    assert parse_match_id(raw) == expected


@pytest.mark.parametrize("raw", ["not json", "[1, 2]"])
def test_parse_match_id_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_match_id(raw)


@pytest.mark.anyio
async def test_returns_known_match(fatwas):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, json=_completion('{"matchId": "surgery-001"}'))

    match = await _fallback(handler).find_match("tajmeel al anf", fatwas)

    assert match == "surgery-001"
    messages = seen["payload"]["messages"]
    assert messages[1] == {"role": "user", "content": "tajmeel al anf"}
    assert "surgery-001" in messages[0]["content"]
    assert seen["payload"]["response_format"] == {"type": "json_object"}


@pytest.mark.anyio
async def test_null_match(fatwas):
    def handler(request):
        return httpx.Response(200, json=_completion('{"matchId": null}'))

    assert await _fallback(handler).find_match("السلام عليكم", fatwas) is None


@pytest.mark.anyio
async def test_unknown_id_is_discarded(fatwas):
    def handler(request):
        return httpx.Response(200, json=_completion('{"matchId": "made-up"}'))

    assert await _fallback(handler).find_match("query", fatwas) is None


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="upstream error"),
        httpx.Response(200, json={"unexpected": True}),
        httpx.Response(200, json=_completion("I think it is icu-001")),
        httpx.Response(200, json={"choices": [{"message": {"content": None}}]}),
    ],
)
async def test_service_errors_degrade_to_none(fatwas, response):
    assert await _fallback(lambda request: response).find_match("query", fatwas) is None


@pytest.mark.anyio
async def test_connection_error_degrades_to_none(fatwas):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert await _fallback(handler).find_match("query", fatwas) is None


@pytest.mark.anyio
async def test_timeout_degrades_to_none(fatwas):
    async def handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json=_completion('{"matchId": "icu-001"}'))

    assert await _fallback(handler, timeout=0.01).find_match("query", fatwas) is None


def test_disabled_by_default():
    assert get_semantic_fallback() is None


@pytest.mark.anyio
async def test_unexpected_error_degrades_to_none(fatwas, monkeypatch):
    async def exploding_call(**kwargs):
        raise KeyError("choices")

    monkeypatch.setattr("faqih.services.semantic_fallback.call_llm", exploding_call)

    assert await SemanticFallback(timeout=5.0).find_match("query", fatwas) is None
