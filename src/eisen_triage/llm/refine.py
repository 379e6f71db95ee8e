# src/eisen_triage/llm/refine.py

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from ..config import Settings, get_settings
from ..triage.models import Quadrant, RefinementResult

logger = logging.getLogger(__name__)

FALLBACK_REASONING = "offline fallback"
REFINED_REASONING = "refined"

# A leading ```json line and/or a trailing ``` fence around the model's JSON.
_FENCE_RE = re.compile(r"^```[\s\S]*?\n|```$")


@dataclass(frozen=True, slots=True)
class RefineConfig:
    endpoint: str = "http://localhost:11434/api/generate"
    model: str = "llama3.2"
    temperature: float = 0.2
    timeout_seconds: float = 3.0

    @staticmethod
    def from_settings(settings: Settings | None = None) -> "RefineConfig":
        if settings is None:
            settings = get_settings()
        return RefineConfig(
            endpoint=settings.refine_endpoint,
            model=settings.refine_model,
            temperature=float(settings.refine_temperature),
            timeout_seconds=max(0.001, settings.refine_timeout_ms / 1000.0),
        )


def fallback_result(heuristic: Quadrant) -> RefinementResult:
    return RefinementResult(quadrant=heuristic, reasoning=FALLBACK_REASONING, refined=False)


def build_prompt(sanitized_text: str, heuristic: Quadrant) -> str:
    return (
        "You categorize 1 task into an Eisenhower quadrant. "
        'Return ONLY JSON {"quadrant":"...","reasoning":"..."}. '
        "Definitions: do=urgent & important; schedule=not urgent & important; "
        "delegate=urgent & not important; eliminate=neither. "
        f'Task: "{sanitized_text}" Heuristic: "{heuristic.value}"'
    )


def build_request_body(config: RefineConfig, sanitized_text: str, heuristic: Quadrant) -> dict[str, Any]:
    return {
        "model": config.model,
        "prompt": build_prompt(sanitized_text, heuristic),
        "options": {"temperature": config.temperature},
        "stream": False,
    }


def parse_generate_response(payload: Any, heuristic: Quadrant) -> RefinementResult:
    """
    Turn a /api/generate body into a refined result.

    Raises ValueError on any shape deviation; the caller maps that to the fallback.
    """
    if not isinstance(payload, dict):
        raise ValueError("generate response is not an object")

    response = payload.get("response") or ""
    if not isinstance(response, str):
        raise ValueError("'response' is not a string")

    raw = _FENCE_RE.sub("", response).strip()
    parsed = json.loads(raw)  # JSONDecodeError is a ValueError
    if not isinstance(parsed, dict):
        raise ValueError("model output is not a JSON object")

    quadrant = Quadrant.parse(parsed.get("quadrant")) or heuristic
    reasoning = parsed.get("reasoning")
    if not isinstance(reasoning, str):
        reasoning = REFINED_REASONING
    return RefinementResult(quadrant=quadrant, reasoning=reasoning, refined=True)


class OllamaRefiner:
    """
    Best-effort secondary classifier backed by a local Ollama-style /api/generate endpoint.

    Behavior:
    - Exactly one POST per call, no retries.
    - The whole exchange is bounded by config.timeout_seconds; on timeout the
      in-flight request is cancelled, not left running in the background.
    - Non-2xx, transport errors, timeouts and malformed output all collapse into
      the fallback result. Nothing is raised to the caller.

    An httpx.AsyncClient can be injected (tests pass one built on httpx.MockTransport).
    Without one, a short-lived client is opened per call.
    """

    def __init__(self, config: RefineConfig | None = None, http_client: httpx.AsyncClient | None = None) -> None:
        self.config = config or RefineConfig()
        self._http = http_client

    async def refine(self, sanitized_text: str, heuristic: Quadrant) -> RefinementResult:
        timeout = self.config.timeout_seconds
        try:
            return await asyncio.wait_for(self._request(sanitized_text, heuristic), timeout=timeout)
        except asyncio.TimeoutError:
            logger.info("refine: timed out after %.2fs, using heuristic=%s", timeout, heuristic.value)
        except Exception as e:
            logger.info("refine: %s, using heuristic=%s", e.__class__.__name__, heuristic.value)
        return fallback_result(heuristic)

    async def _request(self, sanitized_text: str, heuristic: Quadrant) -> RefinementResult:
        body = build_request_body(self.config, sanitized_text, heuristic)

        if self._http is not None:
            resp = await self._post(self._http, body)
        else:
            async with httpx.AsyncClient() as client:
                resp = await self._post(client, body)

        resp.raise_for_status()
        result = parse_generate_response(resp.json(), heuristic)
        logger.debug("refine: model=%s suggested=%s", self.config.model, result.quadrant.value)
        return result

    async def _post(self, client: httpx.AsyncClient, body: dict[str, Any]) -> httpx.Response:
        return await client.post(
            self.config.endpoint,
            json=body,
            timeout=self.config.timeout_seconds,
        )
