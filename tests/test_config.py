"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from rank_tracker.config import Settings


def test_production_rejects_default_jwt_secret():
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(environment="production", database_url="postgresql://u:p@db:5432/rank_tracker")


def test_production_rejects_localhost_database():
    with pytest.raises(ValidationError, match="DATABASE_URL"):
        Settings(
            environment="production",
            jwt_secret="s3cret",
            database_url="postgresql://u:p@localhost:5432/rank_tracker",
        )


def test_ranking_configured_needs_both_credentials():
    assert not Settings(dataforseo_login="login", dataforseo_password=None).ranking_configured
    assert Settings(dataforseo_login="login", dataforseo_password="secret").ranking_configured
