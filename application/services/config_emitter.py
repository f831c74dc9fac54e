"""
Configuration emitter - resolves every key in a fixed order and publishes the
resulting constants for the platform core.
"""
from __future__ import annotations

from typing import Optional

from application.services.env_resolver import EnvResolver, Resolved
from core.logging_config import get_logger
from domain.common.exceptions import MissingRequiredConfigurationError
from domain.site_config import (
    AuthSecrets,
    ConstantRegistry,
    DatabaseConfig,
    MultisiteConfig,
    ObjectCacheConfig,
    SiteConfiguration,
    SiteUrls,
)

logger = get_logger(__name__)


DATABASE_KEYS = ("DB_NAME", "DB_USER", "DB_PASSWORD", "DB_HOST")
SECRET_KEYS = (
    "WP_AUTH_KEY",
    "WP_SECURE_AUTH_KEY",
    "WP_LOGGED_IN_KEY",
    "WP_NONCE_KEY",
    "WP_AUTH_SALT",
    "WP_SECURE_AUTH_SALT",
    "WP_LOGGED_IN_SALT",
    "WP_NONCE_SALT",
)
MULTISITE_KEYS = ("WP_PRIMARY_DOMAIN",)
CACHE_KEYS = ("REDIS_PASSWORD",)

# Resolution order; the first missing key in this order is the one reported
REQUIRED_KEYS = DATABASE_KEYS + SECRET_KEYS + MULTISITE_KEYS + CACHE_KEYS

SUBDOMAIN_INSTALL_KEY = "WP_SUBDOMAIN_INSTALL"
SUBDOMAIN_INSTALL_DEFAULT = "1"


class ConfigurationEmitter:
    """Builds the immutable SiteConfiguration and publishes it as constants."""

    def __init__(self, resolver: EnvResolver):
        self._resolver = resolver

    def resolve_required(self) -> dict[str, str]:
        """Resolve all required keys, failing only after every lookup ran.

        Raises:
            MissingRequiredConfigurationError: naming the first missing key and
                listing all of them.
        """
        values: dict[str, str] = {}
        missing: list[str] = []
        for key in REQUIRED_KEYS:
            resolution = self._resolver.resolve(key)
            if isinstance(resolution, Resolved):
                values[key] = resolution.value
            else:
                missing.append(resolution.key)
        if missing:
            logger.error("required_config_missing", missing_keys=missing)
            raise MissingRequiredConfigurationError(missing[0], missing)
        return values

    def build(self) -> SiteConfiguration:
        v = self.resolve_required()
        subdomain = self._resolver.optional(SUBDOMAIN_INSTALL_KEY, SUBDOMAIN_INSTALL_DEFAULT)
        domain = v["WP_PRIMARY_DOMAIN"]

        config = SiteConfiguration(
            database=DatabaseConfig(
                name=v["DB_NAME"],
                user=v["DB_USER"],
                password=v["DB_PASSWORD"],
                host=v["DB_HOST"],
            ),
            secrets=AuthSecrets(
                auth_key=v["WP_AUTH_KEY"],
                secure_auth_key=v["WP_SECURE_AUTH_KEY"],
                logged_in_key=v["WP_LOGGED_IN_KEY"],
                nonce_key=v["WP_NONCE_KEY"],
                auth_salt=v["WP_AUTH_SALT"],
                secure_auth_salt=v["WP_SECURE_AUTH_SALT"],
                logged_in_salt=v["WP_LOGGED_IN_SALT"],
                nonce_salt=v["WP_NONCE_SALT"],
            ),
            multisite=MultisiteConfig(
                domain_current_site=domain,
                subdomain_install=subdomain == "1",
            ),
            urls=SiteUrls.for_domain(domain),
            cache=ObjectCacheConfig(password=v["REDIS_PASSWORD"]),
        )
        logger.info(
            "config_resolved",
            domain=domain,
            subdomain_install=config.multisite.subdomain_install,
        )
        return config

    def publish(
        self,
        config: SiteConfiguration,
        registry: Optional[ConstantRegistry] = None,
        *,
        abspath: Optional[str] = None,
    ) -> ConstantRegistry:
        """Define every constant of ``config`` in ``registry`` and freeze it.

        ABSPATH is only defined when the registry does not already carry it.
        """
        registry = registry if registry is not None else ConstantRegistry()
        for name, value in config.to_constants().items():
            if not registry.define(name, value):
                logger.warning("constant_already_defined", name=name)
        if abspath is not None and not registry.defined("ABSPATH"):
            registry.define("ABSPATH", abspath)
        registry.freeze()
        logger.info("constants_published", count=len(registry))
        return registry


__all__ = [
    "ConfigurationEmitter",
    "REQUIRED_KEYS",
    "SUBDOMAIN_INSTALL_KEY",
]
