"""
Tests des Settings (pydantic-settings).
"""

from pathlib import Path

from kalanara.config import Settings


class TestSettings:
    """Tests de chargement de la configuration."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.voucher_code_length == 5
        assert settings.voucher_validity_months == 12
        assert settings.payment_enabled is False
        assert settings.email_enabled is False

    def test_env_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("KALANARA_MIDTRANS_SERVER_KEY", "SB-Mid-server-x")
        monkeypatch.setenv("KALANARA_MIDTRANS_CLIENT_KEY", "SB-Mid-client-x")
        monkeypatch.setenv("KALANARA_LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.payment_enabled is True
        assert settings.log_level == "DEBUG"

    def test_payment_needs_both_keys(self) -> None:
        settings = Settings(_env_file=None, midtrans_server_key="SB-Mid-server-x")
        assert settings.payment_enabled is False

    def test_app_url_trailing_slash_removed(self) -> None:
        assert Settings(_env_file=None, app_url="https://kalanara.test/").app_url == "https://kalanara.test"

    def test_log_file_home_expanded(self) -> None:
        settings = Settings(_env_file=None, log_file="~/kalanara.log")
        assert settings.log_file == Path.home() / "kalanara.log"
