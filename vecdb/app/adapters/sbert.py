"""SentenceTransformers embedding adapter implementing EmbeddingPort (optional)."""

from __future__ import annotations

import logging
from typing import Any

from vecdb.app.ports.embedding import EmbeddingPort
from vecdb.errors import EmbeddingFailedError

logger = logging.getLogger(__name__)


class SentenceTransformersEmbedder(EmbeddingPort):
    """Embeddings via ``sentence-transformers``."""

    def __init__(self, model_name: str = "sentence-transformers/all-MiniLM-L6-v2") -> None:
        """Load ``model_name``.

        Raises:
            RuntimeError: If sentence-transformers is not installed.
        """
        try:
            from sentence_transformers import SentenceTransformer  # imported lazily to keep optional dependency
        except Exception as exc:  # pragma: no cover - optional dep
            raise RuntimeError(
                "sentence-transformers is not installed. Install with `pip install vecdb[sbert]`."
            ) from exc

        self.model_name = model_name
        self._model: Any = SentenceTransformer(model_name)
        dim = self._model.get_sentence_embedding_dimension()
        if not dim:
            raise RuntimeError(f"Model {model_name} does not declare an embedding dimension")
        self._dim = int(dim)

    @property
    def dimensions(self) -> int:
        return self._dim

    def embed(self, text: str) -> list[float]:
        if not text.strip():
            raise EmbeddingFailedError("Cannot embed blank text")
        try:
            vector = self._model.encode(text, normalize_embeddings=True)
        except Exception as exc:  # noqa: BLE001 - model failures surface as embedding errors
            logger.debug("Model %s failed on input", self.model_name, exc_info=True)
            raise EmbeddingFailedError(f"{self.model_name} could not embed text") from exc
        return [float(x) for x in vector]
