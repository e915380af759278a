"""Structured generation of plants from a natural-language description.

The pipeline builds a prompt that lists the closed vocabularies, sends it with a
JSON schema to a structured-generation service, and passes the returned object
through the validator before anything is committed. Every failure after the
request is issued surfaces as ``GenerationFailed``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Optional, Protocol

import httpx

from .aggregate import replace_with
from .config import Settings
from .errors import EmptyDescription, GenerationFailed, GeneratorError, PlantValidationError
from .models import DEFAULT_SIZE_CEILING, Environment, GrowthRate, PartType, PlantData, SpecialBehavior, vocabulary
from .validation import decode_generation_response, validate_plant

logger = logging.getLogger(__name__)

PLANT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "plant": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "description": {"type": "string"},
                "parts": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "string"},
                            "type": {"type": "string", "enum": vocabulary(PartType)},
                            "color": {"type": "string"},
                            "size": {"type": "number"},
                            "position": {
                                "type": "object",
                                "properties": {
                                    "x": {"type": "number"},
                                    "y": {"type": "number"},
                                },
                                "required": ["x", "y"],
                            },
                            "growthRate": {"type": "string", "enum": vocabulary(GrowthRate)},
                            "special": {"type": "string", "enum": vocabulary(SpecialBehavior)},
                        },
                        "required": ["id", "type", "color", "size", "position"],
                    },
                },
            },
            "required": ["name", "description", "parts"],
        }
    },
    "required": ["plant"],
}


class StructuredGenerator(Protocol):
    async def generate_object(self, prompt: str, schema: Mapping[str, Any]) -> Mapping[str, Any]:
        """Return ``{"object": <value conforming to schema>}`` or raise."""


def build_generation_prompt(description: str) -> str:
    part_types = ", ".join(vocabulary(PartType))
    growth_rates = ", ".join(vocabulary(GrowthRate))
    behaviors = ", ".join(vocabulary(SpecialBehavior))
    return (
        f'Generate a detailed plant or tree based on this description: "{description.strip()}". '
        f"Create a realistic plant with various parts. Each part type must be one of: {part_types}. "
        f"Each growthRate must be one of: {growth_rates}. "
        f"Each special behavior must be one of: {behaviors}. "
        "Include appropriate colors, sizes, and positioning for each part."
    )


class HttpStructuredGenerator:
    """Structured generator reached over HTTP.

    POSTs ``{"prompt": ..., "schema": ...}`` as JSON and expects a JSON object
    back. Timeouts and connection errors are retried with exponential backoff;
    anything else raises ``GeneratorError`` immediately.
    """

    RETRY_DELAY = 0.5  # doubles each retry

    def __init__(
        self,
        url: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._url = url
        self._api_key = api_key
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpStructuredGenerator":
        if not settings.generator_url:
            raise ValueError("PLANTBUILDER_GENERATOR_URL not set")
        return cls(
            settings.generator_url,
            api_key=settings.generator_api_key,
            timeout=settings.generator_timeout,
            max_retries=settings.generator_max_retries,
        )

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self) -> None:
        if self._client is None:
            headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers=headers,
                transport=self._transport,
            )
            logger.debug("Generator HTTP client started for %s", self._url)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("Generator HTTP client closed")

    async def generate_object(self, prompt: str, schema: Mapping[str, Any]) -> Mapping[str, Any]:
        if self._client is None:
            await self.start()

        payload = {"prompt": prompt, "schema": dict(schema)}
        attempt = 0
        while True:
            try:
                response = await self._client.post(self._url, json=payload)
                response.raise_for_status()
                break
            except httpx.HTTPStatusError as e:
                logger.error("Generator returned HTTP %d: %s", e.response.status_code, e)
                raise GeneratorError(f"generator returned HTTP {e.response.status_code}") from e
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt >= self._max_retries:
                    logger.error("Generator unreachable after %d attempts: %s", attempt + 1, e)
                    raise GeneratorError(f"generator unreachable: {type(e).__name__}") from e
                delay = self.RETRY_DELAY * (2**attempt)
                attempt += 1
                logger.warning(
                    "Generator request failed (%s), retrying in %.1fs... (attempt %d/%d)",
                    type(e).__name__,
                    delay,
                    attempt,
                    self._max_retries,
                )
                await asyncio.sleep(delay)
            except httpx.HTTPError as e:
                raise GeneratorError(f"generator request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise GeneratorError("generator response is not JSON") from e
        if not isinstance(body, dict):
            raise GeneratorError("generator response is not a JSON object")
        return body


async def generate_plant(
    description: str,
    generator: Optional[StructuredGenerator],
    *,
    environment: Optional[Environment] = None,
    size_ceiling: float = DEFAULT_SIZE_CEILING,
) -> PlantData:
    """Generate, validate and wrap a plant; never returns partially applied data."""

    if not description or not description.strip():
        raise EmptyDescription("a plant description is required")
    if generator is None:
        raise GenerationFailed("no generator configured")

    prompt = build_generation_prompt(description)
    logger.info("Requesting plant generation for %r", description.strip()[:80])
    try:
        response = await generator.generate_object(prompt=prompt, schema=PLANT_SCHEMA)
    except Exception as exc:
        logger.warning("Plant generation request failed: %s", exc)
        raise GenerationFailed(f"generation request failed: {exc}") from exc

    try:
        raw_plant = decode_generation_response(response)
        validated = validate_plant(raw_plant, environment, size_ceiling=size_ceiling)
    except PlantValidationError as exc:
        logger.warning("Generated plant rejected: %s", exc)
        raise GenerationFailed(f"generated plant rejected: {exc}") from exc

    plant = replace_with(validated)
    logger.info("Generated plant %r with %d parts", plant.name, len(plant.parts))
    return plant
