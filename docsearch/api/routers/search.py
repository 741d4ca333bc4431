"""Search API router."""

from dataclasses import asdict
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..schemas.search import SearchRequest, SearchResponse, SearchResultItem
from ...searcher import ERROR_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response() -> JSONResponse:
    """結果なし + エラーメッセージの500レスポンス"""
    body = SearchResponse(results=[], answer=ERROR_MESSAGE)
    return JSONResponse(status_code=500, content=body.model_dump())


@router.post("/search", response_model=SearchResponse)
async def search(request: SearchRequest, app_request: Request):
    """セマンティック検索"""
    app_state = app_request.app.state.app_state

    try:
        outcome = await app_state.searcher.search(request.query, request.top_k)

        return SearchResponse(
            results=[SearchResultItem(**asdict(r)) for r in outcome.results],
            answer=outcome.answer
        )

    except Exception:
        logger.exception("Search error")
        return error_response()
