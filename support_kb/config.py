"""Configuration loader for the support knowledge-base tooling."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from support_kb.errors import ConfigError


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Support Knowledge Base"
    version: str = "1.0.0"


class ChunkingConfig(BaseModel):
    """Text chunking configuration."""

    max_chars: int = 1600
    min_paragraph_chars: int = 40


class SupabaseConfig(BaseModel):
    """Hosted backend configuration.

    Only the table and function names live in YAML; the URL and keys
    are read from the environment by ``load_config``.
    """

    url: str | None = None
    service_role_key: str | None = None
    anon_key: str | None = None
    chunks_table: str = "document_chunks"
    embed_function: str = "embed"
    request_timeout: float = 60.0


class IngestionConfig(BaseModel):
    """Batch ingestion configuration."""

    docs_dir: str = "./docs"
    documents: list[str] = Field(
        default_factory=lambda: [
            "cryptopayx_api_documentation.txt",
            "deposit-and-withdrawals.txt",
            "verification.txt",
            "loyalty-program.txt",
            "questions.txt",
            "what_is_a_crypto_exchange.txt",
        ]
    )


class StorageConfig(BaseModel):
    """Local storage paths configuration."""

    sqlite_path: str = "./db/chunks.db"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    supabase: SupabaseConfig = Field(default_factory=SupabaseConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    def require_supabase(
        self, service_role_key: bool = True, anon_key: bool = True
    ) -> SupabaseConfig:
        """Return the Supabase settings, failing if a needed credential is unset.

        The URL is always required. The chunk store needs the service-role
        key and the embedding function needs the anon key.

        Args:
            service_role_key: Require SUPABASE_SERVICE_ROLE_KEY.
            anon_key: Require SUPABASE_ANON_KEY.

        Raises:
            ConfigError: Naming every missing environment variable.
        """
        missing = []
        if not self.supabase.url:
            missing.append("SUPABASE_URL")
        if service_role_key and not self.supabase.service_role_key:
            missing.append("SUPABASE_SERVICE_ROLE_KEY")
        if anon_key and not self.supabase.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}"
            )
        return self.supabase


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Credentials come from the environment only
    config.supabase.url = os.getenv("SUPABASE_URL")
    config.supabase.service_role_key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    config.supabase.anon_key = os.getenv("SUPABASE_ANON_KEY") or os.getenv(
        "VITE_SUPABASE_ANON_KEY"
    )

    return config
