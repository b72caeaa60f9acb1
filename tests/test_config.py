"""
Portico Backend — Settings Tests
==================================

    ✅ Field validators normalize or reject values
    ✅ CORS origins are split from a comma list
    ✅ Production check flags the development JWT secret
"""

import pytest
from pydantic import ValidationError

from portico.config import DEFAULT_JWT_SECRET, Settings


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestValidators:

    def test_log_level_is_uppercased(self):
        assert make_settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_is_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(log_level="chatty")

    def test_asymmetric_jwt_algorithm_is_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(jwt_algorithm="RS256")


class TestCorsOrigins:

    def test_wildcard(self):
        assert make_settings(cors_origins="*").cors_origins_list == ["*"]

    def test_comma_list_is_trimmed(self):
        settings = make_settings(cors_origins="https://a.example, https://b.example ,")
        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]


class TestProductionCheck:

    def test_default_secret_is_flagged(self):
        with pytest.raises(ValueError, match="development default"):
            make_settings(jwt_secret=DEFAULT_JWT_SECRET).validate_required_for_production()

    def test_short_secret_is_flagged(self):
        with pytest.raises(ValueError, match="at least 32"):
            make_settings(jwt_secret="short").validate_required_for_production()

    def test_strong_secret_passes(self):
        make_settings(jwt_secret="x" * 48).validate_required_for_production()
