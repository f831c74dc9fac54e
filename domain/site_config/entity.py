"""Immutable site configuration resolved once at process start."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


URL_SCHEME = "https://"


class InvocationMode(str, Enum):
    """How the bootstrapper was started."""

    CLI = "cli"
    SERVER = "server"


@dataclass(frozen=True)
class DatabaseConfig:
    name: str
    user: str
    password: str = field(repr=False)
    host: str
    charset: str = "utf8mb4"
    collate: str = ""
    table_prefix: str = "wp_"


@dataclass(frozen=True)
class AuthSecrets:
    """Signing keys and salts for the platform's cookies and nonces."""

    auth_key: str = field(repr=False)
    secure_auth_key: str = field(repr=False)
    logged_in_key: str = field(repr=False)
    nonce_key: str = field(repr=False)
    auth_salt: str = field(repr=False)
    secure_auth_salt: str = field(repr=False)
    logged_in_salt: str = field(repr=False)
    nonce_salt: str = field(repr=False)


@dataclass(frozen=True)
class MultisiteConfig:
    domain_current_site: str
    subdomain_install: bool = True
    path_current_site: str = "/"
    site_id_current_site: int = 1
    blog_id_current_site: int = 1
    cookie_domain: str = ""


@dataclass(frozen=True)
class SiteUrls:
    home: str
    siteurl: str

    @classmethod
    def for_domain(cls, domain: str) -> "SiteUrls":
        url = URL_SCHEME + domain
        return cls(home=url, siteurl=url)


@dataclass(frozen=True)
class ObjectCacheConfig:
    password: str = field(repr=False)
    scheme: str = "unix"
    path: str = "/run/redis/redis.sock"
    database: int = 0


@dataclass(frozen=True)
class BehaviorFlags:
    """Fixed platform switches; none of them come from the environment."""

    debug: bool = False
    force_ssl_admin: bool = True
    disallow_file_edit: bool = True
    disallow_file_mods: bool = True
    automatic_updater_disabled: bool = True
    disable_cron: bool = True
    cache_enabled: bool = True
    multisite: bool = True


@dataclass(frozen=True)
class SiteConfiguration:
    """Everything the platform core needs, grouped by concern."""

    database: DatabaseConfig
    secrets: AuthSecrets
    multisite: MultisiteConfig
    urls: SiteUrls
    cache: ObjectCacheConfig
    flags: BehaviorFlags = field(default_factory=BehaviorFlags)

    def to_constants(self) -> dict[str, Any]:
        """Flatten into the named constants the core's startup sequence expects.

        Insertion order follows definition order: database, secrets, behavior
        flags, multisite, URLs, object cache.
        """
        db, s, m, c, f = self.database, self.secrets, self.multisite, self.cache, self.flags
        return {
            "DB_NAME": db.name,
            "DB_USER": db.user,
            "DB_PASSWORD": db.password,
            "DB_HOST": db.host,
            "DB_CHARSET": db.charset,
            "DB_COLLATE": db.collate,
            "AUTH_KEY": s.auth_key,
            "SECURE_AUTH_KEY": s.secure_auth_key,
            "LOGGED_IN_KEY": s.logged_in_key,
            "NONCE_KEY": s.nonce_key,
            "AUTH_SALT": s.auth_salt,
            "SECURE_AUTH_SALT": s.secure_auth_salt,
            "LOGGED_IN_SALT": s.logged_in_salt,
            "NONCE_SALT": s.nonce_salt,
            "table_prefix": db.table_prefix,
            "WP_DEBUG": f.debug,
            "FORCE_SSL_ADMIN": f.force_ssl_admin,
            "DISALLOW_FILE_EDIT": f.disallow_file_edit,
            "DISALLOW_FILE_MODS": f.disallow_file_mods,
            "AUTOMATIC_UPDATER_DISABLED": f.automatic_updater_disabled,
            "DISABLE_WP_CRON": f.disable_cron,
            "MULTISITE": f.multisite,
            "SUBDOMAIN_INSTALL": m.subdomain_install,
            "DOMAIN_CURRENT_SITE": m.domain_current_site,
            "PATH_CURRENT_SITE": m.path_current_site,
            "SITE_ID_CURRENT_SITE": m.site_id_current_site,
            "BLOG_ID_CURRENT_SITE": m.blog_id_current_site,
            "COOKIE_DOMAIN": m.cookie_domain,
            "WP_HOME": self.urls.home,
            "WP_SITEURL": self.urls.siteurl,
            "WP_CACHE": f.cache_enabled,
            "WP_REDIS_SCHEME": c.scheme,
            "WP_REDIS_PATH": c.path,
            "WP_REDIS_PASSWORD": c.password,
            "WP_REDIS_DATABASE": c.database,
        }


# Published names whose values must never reach logs or `check` output
SECRET_CONSTANTS = frozenset({
    "DB_PASSWORD",
    "AUTH_KEY",
    "SECURE_AUTH_KEY",
    "LOGGED_IN_KEY",
    "NONCE_KEY",
    "AUTH_SALT",
    "SECURE_AUTH_SALT",
    "LOGGED_IN_SALT",
    "NONCE_SALT",
    "WP_REDIS_PASSWORD",
})
