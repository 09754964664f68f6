#!/usr/bin/env python3
"""
Reference scoring microservice - the engine side of the external scoring contract.
"""

import hmac
import json
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from core.config_loader import AppConfig
from core.scorer.reference_engine import score_semantic_request
from ..dependencies import get_app_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/scoring", tags=["engine"])


def _bearer_token(request: Request) -> str:
    header = request.headers.get("authorization") or ""
    if not header.startswith("Bearer "):
        return ""
    return header[len("Bearer "):].strip()


@router.post("/semantic")
async def semantic_score(request: Request, config: AppConfig = Depends(get_app_config)):
    """
    Score a payload built by the scoring client.

    Requires `Authorization: Bearer <SCORING_SERVICE_API_KEY>`.
    """
    api_key = config.scoring.service.api_key
    if not api_key:
        logger.error("SCORING_SERVICE_API_KEY not configured on server.")
        raise HTTPException(status_code=500, detail="Scoring service not configured.")

    token = _bearer_token(request)
    if not token or not hmac.compare_digest(token.encode("utf-8"), api_key.encode("utf-8")):
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        body = json.loads(await request.body())
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON payload")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    return score_semantic_request(body)
