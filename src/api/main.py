"""FastAPI app exposing the plant builder to the UI."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from plantbuilder import (
    DEFAULT_SELECTION,
    DuplicateId,
    EmptyDescription,
    GenerationFailed,
    GenerationInProgress,
    GrowthRate,
    HttpStructuredGenerator,
    PartType,
    PlantError,
    PlantWorkspace,
    SpecialBehavior,
    part_to_dict,
    plant_to_dict,
)
from plantbuilder.config import Settings
from plantbuilder.logging_config import configure_logging
from plantbuilder.serialization import environment_to_dict

logger = logging.getLogger(__name__)

SETTINGS = Settings()
configure_logging(level=SETTINGS.log_level)


def _build_workspace(settings: Settings) -> PlantWorkspace:
    generator = HttpStructuredGenerator.from_settings(settings) if settings.generator_url else None
    if generator is None:
        logger.warning("No generator URL configured; AI generation is disabled")
    return PlantWorkspace(generator, size_ceiling=settings.size_ceiling)


WORKSPACE = _build_workspace(SETTINGS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if isinstance(WORKSPACE.generator, HttpStructuredGenerator):
        await WORKSPACE.generator.close()


app = FastAPI(title="Plant Builder API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS = {
    DuplicateId: 409,
    GenerationInProgress: 409,
    GenerationFailed: 502,
    EmptyDescription: 400,
}


@app.exception_handler(PlantError)
async def plant_error_handler(request: Request, exc: PlantError) -> JSONResponse:
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        400,
    )
    return JSONResponse({"error": exc.kind, "detail": str(exc)}, status_code=status_code)


class PositionPayload(BaseModel):
    x: float
    y: float


class PartRequest(BaseModel):
    type: PartType = DEFAULT_SELECTION["type"]
    color: str = DEFAULT_SELECTION["color"]
    growth_rate: GrowthRate = DEFAULT_SELECTION["growth_rate"]
    special: Optional[SpecialBehavior] = DEFAULT_SELECTION["special"]
    position: Optional[PositionPayload] = Field(
        default=None,
        description="Explicit placement; a random canvas position is used when omitted.",
    )


class EnvironmentUpdateRequest(BaseModel):
    field: str
    value: float


class StepRequest(BaseModel):
    ticks: int = Field(default=1, ge=1, le=100)


class GenerateRequest(BaseModel):
    description: str


def _state() -> dict[str, object]:
    return {
        "plant": plant_to_dict(WORKSPACE.plant),
        "environment": environment_to_dict(WORKSPACE.environment),
        "generating": WORKSPACE.is_generating,
    }


@app.get("/state")
def get_state() -> dict[str, object]:
    return _state()


@app.post("/reset")
def reset_plant() -> dict[str, object]:
    WORKSPACE.reset()
    return _state()


@app.post("/parts")
def add_part(request: PartRequest) -> dict[str, object]:
    position = request.position.model_dump() if request.position else None
    part = WORKSPACE.add_part(
        request.type,
        request.color,
        request.growth_rate,
        request.special,
        position,
    )
    return {"part": part_to_dict(part), **_state()}


@app.post("/environment")
def update_environment(request: EnvironmentUpdateRequest) -> dict[str, object]:
    WORKSPACE.set_environment(request.field, request.value)
    return _state()


@app.post("/step")
def step_simulation(request: StepRequest) -> dict[str, object]:
    if WORKSPACE.plant is None:
        raise HTTPException(status_code=404, detail="No plant to simulate")
    WORKSPACE.simulate(request.ticks)
    return _state()


@app.post("/generate")
async def generate(request: GenerateRequest) -> dict[str, object]:
    await WORKSPACE.generate(request.description)
    return _state()


def main() -> None:
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, log_level="info")


if __name__ == "__main__":
    main()
