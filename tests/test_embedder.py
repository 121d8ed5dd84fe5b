"""Tests for the Edge Function embedding client."""

from unittest.mock import MagicMock

import pytest
import requests

from support_kb.config import SupabaseConfig
from support_kb.errors import EmbeddingError
from support_kb.ingestion.embedder import EdgeFunctionEmbedder


def _response(status: int, payload: object = None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.text = text
    resp.json.return_value = payload
    return resp


@pytest.fixture
def supabase_config() -> SupabaseConfig:
    return SupabaseConfig(url="https://demo.supabase.co", anon_key="anon-key")


class TestEdgeFunctionEmbedder:
    def test_posts_text_and_returns_embedding(self, supabase_config: SupabaseConfig) -> None:
        session = MagicMock()
        session.post.return_value = _response(200, {"embedding": [0.1, 0.2, 0.3]})
        embedder = EdgeFunctionEmbedder(supabase_config, session=session)

        assert embedder.embed("[Fees]\n\nfree") == [0.1, 0.2, 0.3]

        args, kwargs = session.post.call_args
        assert args[0] == "https://demo.supabase.co/functions/v1/embed"
        assert kwargs["json"] == {"text": "[Fees]\n\nfree"}
        assert kwargs["headers"]["apikey"] == "anon-key"

    def test_custom_function_name(self) -> None:
        config = SupabaseConfig(url="https://demo.supabase.co", embed_function="embed-v2")
        session = MagicMock()
        session.post.return_value = _response(200, {"embedding": [1.0]})
        EdgeFunctionEmbedder(config, session=session).embed("x")
        assert session.post.call_args[0][0].endswith("/functions/v1/embed-v2")

    def test_http_error_raises(self, supabase_config: SupabaseConfig) -> None:
        session = MagicMock()
        session.post.return_value = _response(546, text="compute limit")
        embedder = EdgeFunctionEmbedder(supabase_config, session=session)

        with pytest.raises(EmbeddingError, match="546 compute limit") as exc_info:
            embedder.embed("x")
        assert exc_info.value.status_code == 546
        assert session.post.call_count == 1

    def test_transport_error_raises(self, supabase_config: SupabaseConfig) -> None:
        session = MagicMock()
        session.post.side_effect = requests.exceptions.ConnectionError("down")
        embedder = EdgeFunctionEmbedder(supabase_config, session=session)

        with pytest.raises(EmbeddingError, match="down"):
            embedder.embed("x")

    def test_missing_embedding_field(self, supabase_config: SupabaseConfig) -> None:
        session = MagicMock()
        session.post.return_value = _response(200, {"error": "nope"})
        embedder = EdgeFunctionEmbedder(supabase_config, session=session)

        with pytest.raises(EmbeddingError, match="no embedding"):
            embedder.embed("x")
