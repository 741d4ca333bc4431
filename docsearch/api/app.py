"""FastAPI application for documentation search."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from .routers import search
from .routers.search import error_response
from .schemas.search import HealthResponse
from .dependencies import get_app_state
from .middleware import timing_middleware
import logging

# ロギング設定
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# FastAPIアプリケーション作成
app = FastAPI(
    title="Docs Search API",
    description="Semantic search API for documentation pages using an embedding service and Qdrant",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# アプリケーション状態初期化（起動時1回のみ）
app.state.app_state = get_app_state()

# CORS設定（origins は config.yaml の api.cors_origins）
app.add_middleware(
    CORSMiddleware,
    allow_origins=app.state.app_state.config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# タイミング計測ミドルウェア
app.middleware("http")(timing_middleware)

# ルーター登録
app.include_router(search.router, prefix="/api", tags=["search"])


# 不正なリクエストボディも検索エラーとして応答
@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return error_response()


# ヘルスチェック
@app.get("/health", response_model=HealthResponse)
async def health():
    """ヘルスチェックエンドポイント"""
    app_state = app.state.app_state
    index_size = await app_state.vector_store.count()

    return HealthResponse(
        status="healthy" if index_size is not None else "degraded",
        collection=app_state.config.vector_index.collection_name,
        index_size=index_size
    )
