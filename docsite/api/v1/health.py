# docsite/api/v1/health.py
from http import HTTPStatus
from typing import Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger

from ... import deps

router = APIRouter()


@router.get("/healthz")
def get_health():
    """
    Liveness probe. Returns 200 once the data source has loaded and 503
    while it cannot be loaded.
    """
    try:
        ds = deps.get_ds()
    except Exception as e:
        logger.error("healthz: data source unavailable: {}", e)
        return JSONResponse(
            {"description": "Data source unavailable."},
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
        )
    body: Dict = {"description": "Service reachable.", "datasource": type(ds).__name__}
    return body
