"""Configuration management module for the documentation search service."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class EmbeddingConfig:
    """Embedding model service configuration."""
    base_url: str = "http://localhost:8082"
    invoke_path: str = "/api/v1/invoke"
    model: str = "text-embedding-3-small"
    service_type: str = "embedding"
    task: str = "embed"
    timeout: float = 10.0


@dataclass
class VectorIndexConfig:
    """Qdrant vector index configuration."""
    base_url: str = "http://localhost:6333"
    collection_name: str = "isa_docs"
    overfetch_factor: int = 2
    timeout: float = 10.0
    api_key: Optional[str] = None


@dataclass
class SearchConfig:
    """Search result shaping configuration."""
    default_top_k: int = 5
    min_query_chars: int = 2
    description_chars: int = 150
    description_suffix: str = "..."
    default_title: str = "Untitled"


@dataclass
class ApiConfig:
    """HTTP API configuration."""
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    slow_request_ms: float = 2000.0


@dataclass
class AppConfig:
    """Application configuration."""
    embedding: EmbeddingConfig
    vector_index: VectorIndexConfig
    search: SearchConfig
    api: ApiConfig


# Environment variable -> (section, attribute)
ENV_OVERRIDES = {
    "MODEL_URL": ("embedding", "base_url"),
    "QDRANT_URL": ("vector_index", "base_url"),
    "QDRANT_COLLECTION": ("vector_index", "collection_name"),
    "QDRANT_API_KEY": ("vector_index", "api_key"),
}


def _find_config_file(config_path: Optional[Path]) -> Optional[Path]:
    if config_path and config_path.exists():
        return config_path

    env_path = os.getenv("DOCSEARCH_CONFIG")
    if env_path:
        candidate = Path(env_path)
        if candidate.exists():
            return candidate

    project_root = Path(__file__).parent.parent
    candidate = project_root / "config.yaml"
    if candidate.exists():
        return candidate

    return None


def apply_env_overrides(config: AppConfig) -> AppConfig:
    """Overwrite service locations with values from the environment."""
    for env_name, (section, attr) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            setattr(getattr(config, section), attr, value)
    return config


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from YAML file and environment.

    Search order:
    1. config_path (if provided)
    2. the file named by DOCSEARCH_CONFIG
    3. project_root/config.yaml

    If no config file is found, defaults are used. Environment variables
    (MODEL_URL, QDRANT_URL, QDRANT_COLLECTION, QDRANT_API_KEY) always win
    over the file.

    Args:
        config_path: Explicit path to config file

    Returns:
        AppConfig instance with loaded or default configuration
    """
    yaml_path = _find_config_file(config_path)

    config_dict = {}
    if yaml_path:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}

    api_section = config_dict.get('api', {})
    api_cfg = ApiConfig(
        **{k: v for k, v in api_section.items() if k != 'cors_origins'}
    )
    if 'cors_origins' in api_section:
        api_cfg.cors_origins = list(api_section['cors_origins'])

    config = AppConfig(
        embedding=EmbeddingConfig(**config_dict.get('embedding', {})),
        vector_index=VectorIndexConfig(**config_dict.get('vector_index', {})),
        search=SearchConfig(**config_dict.get('search', {})),
        api=api_cfg
    )

    return apply_env_overrides(config)
