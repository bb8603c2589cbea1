"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe KALANARA_,
et peut optionnellement être fournie via un fichier .env.

Les clés Midtrans et Resend sont optionnelles - le paiement et l'envoi d'e-mails
sont désactivés si elles ne sont pas fournies.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de kalanara/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe KALANARA_.
    Exemple : KALANARA_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="KALANARA_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///data/kalanara.db")

    # URL publique de la boutique (liens de vérification, callback Midtrans)
    app_url: str = Field(default="http://localhost:8000")

    # Vouchers
    voucher_code_length: int = Field(default=5, ge=4, le=32)
    voucher_code_max_attempts: int = Field(default=5, ge=1)
    voucher_validity_months: int = Field(default=12, ge=1)

    # Midtrans (OPTIONNEL - paiement désactivé si non défini)
    midtrans_server_key: Optional[str] = Field(default=None)
    midtrans_client_key: Optional[str] = Field(default=None)
    midtrans_is_production: bool = Field(default=False)

    # Resend (OPTIONNEL - envoi d'e-mails désactivé si non défini)
    resend_api_key: Optional[str] = Field(default=None)
    email_from: str = Field(default="Kalanara Spa <vouchers@kalanaraspa.com>")

    # Session admin (cookie signé JWT)
    session_secret: str = Field(default="change-me-in-production")
    session_cookie_name: str = Field(default="kalanara_session")
    session_ttl_minutes: int = Field(default=480, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/kalanara.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("app_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Retire le slash final pour construire les liens par concaténation."""
        return v.rstrip("/")

    @property
    def payment_enabled(self) -> bool:
        """Vérifie si les clés Midtrans sont configurées."""
        return bool(self.midtrans_server_key) and bool(self.midtrans_client_key)

    @property
    def email_enabled(self) -> bool:
        """Vérifie si l'API Resend est configurée."""
        return bool(self.resend_api_key)
