"""Search API request and response schemas."""

from pydantic import BaseModel, Field
from typing import List, Optional


class SearchRequest(BaseModel):
    """検索リクエスト"""
    query: Optional[str] = Field(None, description="検索クエリ（2文字未満は空結果）")
    top_k: Optional[int] = Field(5, ge=1, le=100, description="返却件数")


class SearchResultItem(BaseModel):
    """検索結果の個別アイテム（1ページ1件）"""
    title: str
    description: str
    href: str
    category: Optional[str] = None
    score: float


class SearchResponse(BaseModel):
    """検索レスポンス"""
    results: List[SearchResultItem]
    answer: Optional[str] = None


class HealthResponse(BaseModel):
    """ヘルスチェックレスポンス"""
    status: str
    collection: str
    index_size: Optional[int] = None
