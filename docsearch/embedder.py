"""Query embedding module using the model service's invoke API."""

from dataclasses import dataclass
from typing import List, Optional
import logging

import httpx

from .config import EmbeddingConfig


logger = logging.getLogger(__name__)


@dataclass
class EmbeddingResult:
    """Outcome of a single embedding request: a vector or an error."""
    vector: Optional[List[float]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.vector is not None

    @classmethod
    def success(cls, vector: List[float]) -> "EmbeddingResult":
        return cls(vector=vector)

    @classmethod
    def failure(cls, error: str) -> "EmbeddingResult":
        return cls(error=error)


def extract_vector(data) -> Optional[List[float]]:
    """Pull the first embedding out of an invoke response, or None."""
    if not isinstance(data, dict) or not data.get("success"):
        return None

    result = data.get("result")
    if not isinstance(result, dict):
        return None

    embeddings = result.get("embeddings")
    if not isinstance(embeddings, list) or not embeddings:
        return None

    first = embeddings[0]
    if not isinstance(first, list) or not first:
        return None

    try:
        return [float(value) for value in first]
    except (TypeError, ValueError):
        return None


class Embedder:
    """Embedding model service client."""

    def __init__(
        self,
        config: EmbeddingConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Embedder.

        Args:
            config: Embedding configuration
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.config = config
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return self.config.base_url.rstrip("/") + self.config.invoke_path

    def build_payload(self, query: str) -> dict:
        return {
            "input_data": [query],
            "model": self.config.model,
            "service_type": self.config.service_type,
            "task": self.config.task
        }

    async def embed_query(self, query: str) -> EmbeddingResult:
        """
        Generate embedding for a query.

        A single attempt is made. Network errors, timeouts and responses
        without a usable vector are returned as a failed EmbeddingResult
        instead of being raised.

        Args:
            query: Query text

        Returns:
            EmbeddingResult holding the vector or the failure reason
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self.transport
            ) as client:
                response = await client.post(self.endpoint, json=self.build_payload(query))
            data = response.json()
        except httpx.TimeoutException as e:
            logger.warning(f"Embedding request timed out after {self.config.timeout}s: {e}")
            return EmbeddingResult.failure("timeout")
        except httpx.HTTPError as e:
            logger.warning(f"Embedding request failed: {e}")
            return EmbeddingResult.failure(str(e))
        except ValueError as e:
            logger.warning(f"Embedding service returned invalid JSON: {e}")
            return EmbeddingResult.failure("invalid response")

        vector = extract_vector(data)
        if vector is None:
            logger.warning(
                f"Embedding service returned no usable vector (status={response.status_code})"
            )
            return EmbeddingResult.failure("no embedding in response")

        logger.debug(f"Embedded query into {len(vector)} dimensions")
        return EmbeddingResult.success(vector)
