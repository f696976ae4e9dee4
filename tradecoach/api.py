"""FastAPI service for generating and assessing coaching scenarios.

Stateless: every request generates (or scores) from scratch; a run is
returned to the client and sent back with the assessment.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from tradecoach import __version__
from tradecoach.coaching import assess_coaching
from tradecoach.config import Settings, configure_logging
from tradecoach.errors import GenerationError, ValidationError
from tradecoach.generator.scenario import ScenarioOrchestrator
from tradecoach.models import (
    ASSET_CLASSES,
    DIFFICULTIES,
    EMOTION_TYPES,
    MARKET_CONDITIONS,
    SESSIONS,
    TIME_FRAMES,
    TRADING_BEHAVIORS,
    TraderState,
)

settings = Settings.from_env()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

logger.info("[STARTUP] seed=%s cors_origins=%s",
            settings.seed if settings.seed is not None else "unset",
            ",".join(settings.cors_origins))

app = FastAPI(
    title="Trade Coach",
    description="Trading-psychology coaching scenario generator",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# ─── Helpers ─────────────────────────────────────────────────────────────────


def _orchestrator(seed: Optional[int]) -> ScenarioOrchestrator:
    """Request seed wins over the configured one; neither means unseeded."""
    if seed is None:
        seed = settings.seed
    return ScenarioOrchestrator(random.Random(seed))


# ─── Request models ──────────────────────────────────────────────────────────


class RandomScenarioRequest(BaseModel):
    seed: Optional[int] = None


class CustomScenarioRequest(BaseModel):
    market_condition: str
    time_frame: str
    asset_class: str
    difficulty: str
    emotion_types: list[str] = Field(default_factory=list)
    seed: Optional[int] = None


class AssessmentRequest(BaseModel):
    trader_state: dict[str, Any]
    scenario_id: Optional[str] = None
    trader_id: Optional[str] = None
    emotional_state: str
    behaviors: list[str] = Field(default_factory=list)
    advice: str = ""


# ─── Endpoints ───────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, Any]:
    return {"status": "ok", "version": __version__}


@app.get("/reference")
def reference() -> dict[str, Any]:
    return {
        "market_conditions": list(MARKET_CONDITIONS),
        "time_frames": list(TIME_FRAMES),
        "asset_classes": list(ASSET_CLASSES),
        "difficulties": list(DIFFICULTIES),
        "emotion_types": list(EMOTION_TYPES),
        "trading_behaviors": list(TRADING_BEHAVIORS),
        "sessions": list(SESSIONS),
    }


@app.post("/scenarios/random")
def random_scenario(req: RandomScenarioRequest) -> dict[str, Any]:
    try:
        result = _orchestrator(req.seed).generate_random()
    except GenerationError as e:
        logger.exception("[GENERATE] random scenario failed")
        raise HTTPException(500, f"Failed to generate scenario: {e}")
    return result.to_dict()


@app.post("/scenarios/custom")
def custom_scenario(req: CustomScenarioRequest) -> dict[str, Any]:
    try:
        result = _orchestrator(req.seed).generate_custom(
            req.market_condition, req.time_frame, req.asset_class,
            req.difficulty, req.emotion_types,
        )
    except ValidationError as e:
        logger.warning("[GENERATE] rejected custom request: %s", e)
        raise HTTPException(422, str(e))
    except GenerationError as e:
        logger.exception("[GENERATE] custom scenario failed")
        raise HTTPException(500, f"Failed to generate scenario: {e}")
    return result.to_dict()


@app.post("/coaching/assess")
def assess(req: AssessmentRequest) -> dict[str, Any]:
    try:
        state = TraderState.from_dict(req.trader_state)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("[ASSESS] malformed trader_state: %s", e)
        raise HTTPException(422, f"Malformed trader_state: {e}")

    try:
        session = assess_coaching(
            state, req.emotional_state, req.behaviors, req.advice,
            scenario_id=req.scenario_id, trader_id=req.trader_id,
        )
    except ValidationError as e:
        raise HTTPException(422, str(e))
    return session.to_dict()


def serve():
    """Console entry point: run the API with uvicorn."""
    import uvicorn

    logger.info("[STARTUP] serving on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
