"""Dependency injection for FastAPI."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from ..config import AppConfig, load_config
from ..embedder import Embedder
from ..vector_store import VectorStore
from ..searcher import Searcher

load_dotenv()


@dataclass
class AppState:
    """アプリケーション状態（シングルトン、リクエスト間で可変状態は持たない）"""
    config: AppConfig
    embedder: Embedder
    vector_store: VectorStore
    searcher: Searcher


def build_app_state(config: AppConfig, transport=None) -> AppState:
    """設定からコンポーネントを組み立てる（テストではtransportを差し替え）"""
    embedder = Embedder(config.embedding, transport=transport)
    vector_store = VectorStore(config.vector_index, transport=transport)
    searcher = Searcher(embedder, vector_store, config.search)

    return AppState(
        config=config,
        embedder=embedder,
        vector_store=vector_store,
        searcher=searcher
    )


def get_app_state(config_path: Optional[Path] = None) -> AppState:
    """設定ファイルと環境変数からアプリケーション状態を初期化（起動時1回）"""
    return build_app_state(load_config(config_path))
