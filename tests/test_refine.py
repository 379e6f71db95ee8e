# tests/test_refine.py

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from eisen_triage.llm.offline import OfflineRefiner
from eisen_triage.llm.refine import (
    OllamaRefiner,
    RefineConfig,
    build_request_body,
    parse_generate_response,
)
from eisen_triage.triage.models import Quadrant, RefinementResult

FALLBACK = RefinementResult(quadrant=Quadrant.SCHEDULE, reasoning="offline fallback", refined=False)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _generate(text: str) -> httpx.Response:
    return httpx.Response(200, json={"model": "llama3.2", "response": text, "done": True})


@pytest.mark.asyncio
async def test_refined_result_from_fenced_json() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return _generate('```json\n{"quadrant":"do","reasoning":"deadline is close"}\n```')

    async with _client(handler) as client:
        refiner = OllamaRefiner(RefineConfig(), http_client=client)
        result = await refiner.refine("prepare [email] report", Quadrant.SCHEDULE)

    assert result == RefinementResult(quadrant=Quadrant.DO, reasoning="deadline is close", refined=True)

    body = seen[0]
    assert body["model"] == "llama3.2"
    assert body["stream"] is False
    assert body["options"] == {"temperature": 0.2}
    assert 'Task: "prepare [email] report"' in body["prompt"]
    assert 'Heuristic: "schedule"' in body["prompt"]


@pytest.mark.asyncio
async def test_timeout_cancels_request_and_falls_back() -> None:
    events: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            events.append("cancelled")
            raise
        events.append("finished")
        return _generate('{"quadrant":"do"}')

    async with _client(handler) as client:
        refiner = OllamaRefiner(RefineConfig(timeout_seconds=0.05), http_client=client)
        result = await refiner.refine("x", Quadrant.SCHEDULE)

    assert result == FALLBACK
    assert events == ["cancelled"]


@pytest.mark.asyncio
async def test_single_attempt_on_server_error() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="model not loaded")

    async with _client(handler) as client:
        result = await OllamaRefiner(http_client=client).refine("x", Quadrant.SCHEDULE)

    assert result == FALLBACK
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_transport_error_falls_back() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        result = await OllamaRefiner(http_client=client).refine("x", Quadrant.SCHEDULE)

    assert result == FALLBACK


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"done": True}),
        httpx.Response(200, json={"response": 42}),
        httpx.Response(200, json={"response": "Sure! The quadrant is do."}),
        httpx.Response(200, json={"response": '["do"]'}),
    ],
)
async def test_malformed_responses_fall_back(response: httpx.Response) -> None:
    async with _client(lambda request: response) as client:
        result = await OllamaRefiner(http_client=client).refine("x", Quadrant.SCHEDULE)

    assert result == FALLBACK


@pytest.mark.asyncio
async def test_unreachable_endpoint_without_injected_client() -> None:
    config = RefineConfig(endpoint="http://127.0.0.1:9/api/generate", timeout_seconds=0.5)
    result = await OllamaRefiner(config).refine("x", Quadrant.SCHEDULE)
    assert result == FALLBACK


def test_missing_quadrant_keeps_heuristic() -> None:
    result = parse_generate_response({"response": '{"reasoning":"looks fine"}'}, Quadrant.DELEGATE)
    assert result == RefinementResult(quadrant=Quadrant.DELEGATE, reasoning="looks fine", refined=True)


def test_unknown_quadrant_label_keeps_heuristic() -> None:
    result = parse_generate_response({"response": '{"quadrant":"urgent","reasoning":"r"}'}, Quadrant.DO)
    assert result.quadrant == Quadrant.DO


def test_non_string_reasoning_becomes_marker() -> None:
    result = parse_generate_response({"response": '{"quadrant":"Eliminate","reasoning":[1]}'}, Quadrant.DO)
    assert result == RefinementResult(quadrant=Quadrant.ELIMINATE, reasoning="refined", refined=True)


def test_request_body_uses_config() -> None:
    config = RefineConfig(model="qwen2.5", temperature=0.0)
    body = build_request_body(config, "t", Quadrant.DO)
    assert body["model"] == "qwen2.5"
    assert body["options"] == {"temperature": 0.0}
    assert body["stream"] is False


def test_config_from_settings() -> None:
    settings = SimpleNamespace(
        refine_endpoint="http://gpu-box:11434/api/generate",
        refine_model="llama3.2",
        refine_temperature=0.1,
        refine_timeout_ms=1500,
    )
    config = RefineConfig.from_settings(settings)
    assert config.endpoint == "http://gpu-box:11434/api/generate"
    assert config.temperature == 0.1
    assert config.timeout_seconds == 1.5


@pytest.mark.asyncio
async def test_offline_refiner_always_falls_back() -> None:
    refiner = OfflineRefiner()
    assert await refiner.refine("x", Quadrant.SCHEDULE) == FALLBACK
    assert await refiner.refine("y", Quadrant.DO) == RefinementResult(
        quadrant=Quadrant.DO, reasoning="offline fallback", refined=False
    )
