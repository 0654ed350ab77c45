"""Knowledge base API"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from kbengine import KnowledgeEngine, KnowledgeRequest, to_error_response
from kbengine.errors import KBEngineError
from web.core.context import get_engine, status_code_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/knowledge", tags=["knowledge"])


@router.post("")
async def manage_knowledge(
    req: KnowledgeRequest,
    engine: KnowledgeEngine = Depends(get_engine),
):
    """Run one knowledge operation (ingest, search, deleteByUri, getByUri, getChunk)."""
    try:
        response = await engine.execute(req)
    except KBEngineError as e:
        status = status_code_for(e)
        logger.warning(f"Operation '{req.operation}' failed with {status}: {e.message}")
        return JSONResponse(
            status_code=status,
            content=to_error_response(e, req.operation).to_wire(),
        )

    return JSONResponse(content=response.to_wire())
