"""Pytest bootstrap configuration.

Provides a complete environment for the bootstrapper and settings that never
touch the real /etc/server.env.
"""
import pytest

from core.config import Settings


REQUIRED_ENV = {
    "DB_NAME": "wordpress",
    "DB_USER": "wp",
    "DB_PASSWORD": "db-secret",
    "DB_HOST": "localhost",
    "WP_AUTH_KEY": "auth-key",
    "WP_SECURE_AUTH_KEY": "secure-auth-key",
    "WP_LOGGED_IN_KEY": "logged-in-key",
    "WP_NONCE_KEY": "nonce-key",
    "WP_AUTH_SALT": "auth-salt",
    "WP_SECURE_AUTH_SALT": "secure-auth-salt",
    "WP_LOGGED_IN_SALT": "logged-in-salt",
    "WP_NONCE_SALT": "nonce-salt",
    "WP_PRIMARY_DOMAIN": "example.com",
    "REDIS_PASSWORD": "redis-secret",
}


@pytest.fixture
def site_env() -> dict:
    return dict(REQUIRED_ENV)


@pytest.fixture
def env_file(tmp_path):
    return tmp_path / "server.env"


@pytest.fixture
def settings(env_file) -> Settings:
    return Settings(ENV_FILE=str(env_file), ABSPATH="/srv/www/wordpress")
