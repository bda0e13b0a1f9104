"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe SUBPAIR_,
et peut optionnellement être fournie via un fichier .env.

La clé API du fournisseur IA est optionnelle : sans clé, seules les commandes
qui n'appellent pas l'IA (cache, info) restent utilisables.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.adapters.ai.retry import RetryConfig

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

# Fournisseurs IA supportés
SUPPORTED_PROVIDERS: tuple[str, ...] = ("openai", "openrouter", "azure-openai")


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe SUBPAIR_.
    Exemple : SUBPAIR_AI_MODEL=gpt-4.1 ou SUBPAIR_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBPAIR_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Fournisseur IA
    ai_provider: str = Field(default="openai")
    ai_api_key: Optional[str] = Field(default=None)
    ai_model: str = Field(default="gpt-4.1-mini")
    ai_base_url: str = Field(default="https://api.openai.com/v1")
    ai_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    ai_max_tokens: int = Field(default=10000, ge=1)
    ai_request_timeout_seconds: float = Field(default=120.0, gt=0)
    ai_max_sample_length: int = Field(default=3000, ge=0)

    # Retry (délais en millisecondes)
    ai_retry_attempts: int = Field(default=3, ge=1)
    ai_retry_delay_ms: int = Field(default=1000, ge=0)
    ai_retry_max_delay_ms: int = Field(default=30000, ge=0)
    ai_backoff_multiplier: float = Field(default=2.0, ge=1.0)

    # Azure OpenAI
    azure_deployment_id: Optional[str] = Field(default=None)
    azure_api_version: str = Field(default="2025-04-01-preview")

    # Appariement et relocalisation
    match_confidence_threshold: int = Field(default=80, ge=0, le=100)
    backup_enabled: bool = Field(default=False)
    max_concurrent_jobs: int = Field(default=4, ge=1)

    # Cache des simulations (dry-run)
    cache_file: Path = Field(default=Path("~/.subpair/match_cache.json"))

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/subpair.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_file", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("ai_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Normalise le nom du fournisseur et rejette les valeurs inconnues."""
        provider = str(v).strip().lower()
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"fournisseur IA inconnu: {v!r} (attendu: {', '.join(SUPPORTED_PROVIDERS)})"
            )
        return provider

    @property
    def ai_enabled(self) -> bool:
        """Vérifie si une clé API IA est configurée."""
        return bool(self.ai_api_key)

    @property
    def retry_config(self) -> RetryConfig:
        """Politique de retry dérivée des paramètres (ms convertis en secondes)."""
        return RetryConfig(
            max_attempts=self.ai_retry_attempts,
            base_delay=self.ai_retry_delay_ms / 1000,
            max_delay=self.ai_retry_max_delay_ms / 1000,
            backoff_multiplier=self.ai_backoff_multiplier,
        )
