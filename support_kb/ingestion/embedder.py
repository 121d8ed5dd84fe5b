"""Embedding client for the hosted ``embed`` Edge Function."""

import logging

import requests

from support_kb.config import SupabaseConfig
from support_kb.errors import EmbeddingError

logger = logging.getLogger(__name__)


class EdgeFunctionEmbedder:
    """Computes one embedding per call through the Supabase Edge Function.

    Calls are never batched or retried: the function runs under tight
    compute limits, and a failed call aborts the caller's run.

    Args:
        config: SupabaseConfig with url, anon_key and embed_function.
        session: Optional requests session, mainly for tests.
    """

    def __init__(self, config: SupabaseConfig, session: requests.Session | None = None) -> None:
        self._url = f"{config.url}/functions/v1/{config.embed_function}"
        self._anon_key = config.anon_key or ""
        self._timeout = config.request_timeout
        self._session = session or requests.Session()

    def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Raises:
            EmbeddingError: On a transport error, a non-2xx status, or a
                response without an ``embedding`` field.
        """
        headers = {
            "Content-Type": "application/json",
            "apikey": self._anon_key,
        }
        try:
            resp = self._session.post(
                self._url, json={"text": text}, headers=headers, timeout=self._timeout
            )
        except requests.exceptions.RequestException as e:
            raise EmbeddingError(f"Embed request failed: {e}") from e

        if not resp.ok:
            raise EmbeddingError(
                f"Embed failed: {resp.status_code} {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            embedding = resp.json()["embedding"]
        except (ValueError, KeyError, TypeError) as e:
            raise EmbeddingError("Embed response has no embedding", resp.status_code) from e

        logger.debug("Embedded %d chars into %d dims", len(text), len(embedding))
        return embedding
