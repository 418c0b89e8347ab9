import logging
from typing import Any, Dict, List

import structlog
from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .models import HealthResponse, OutlineNode, ProjectFeatures, TimelineHealthRequest
from .normalize import DeltaFormatError, delta_to_outline, parse_delta
from .timeline import TimelineHealthError, normalize_timeline_health

settings = get_settings()

structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level)
    ),
)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="report-outline",
    description="Normalizes rich-text outline deltas from weekly status reports",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post(
    "/normalize",
    response_model=List[OutlineNode],
    response_model_exclude_defaults=True,
)
def normalize_delta(payload: Dict[str, Any] = Body(...)):
    try:
        delta = parse_delta(payload)
    except DeltaFormatError as exc:
        logger.warning("delta_rejected", reason=str(exc))
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    forest = delta_to_outline(delta)
    logger.info("delta_normalized", ops=len(delta.ops), roots=len(forest))
    return forest

@app.post(
    "/timeline-health/normalize",
    response_model=List[ProjectFeatures],
    response_model_exclude_defaults=True,
)
def normalize_timeline(request: TimelineHealthRequest):
    try:
        return normalize_timeline_health(request.timelineHealth)
    except TimelineHealthError as exc:
        logger.warning("timeline_health_rejected", reason=str(exc))
        raise HTTPException(status_code=422, detail=str(exc)) from exc
