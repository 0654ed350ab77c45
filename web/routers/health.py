"""Health probe"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from kbengine import KnowledgeEngine
from web.core.context import get_engine

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz(engine: KnowledgeEngine = Depends(get_engine)):
    """200 when the vector store answers, 503 otherwise."""
    report = engine.health()
    status = 200 if report["vectorStore"]["healthy"] else 503
    return JSONResponse(status_code=status, content=report)
