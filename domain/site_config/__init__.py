from .entity import (
    AuthSecrets,
    BehaviorFlags,
    DatabaseConfig,
    InvocationMode,
    MultisiteConfig,
    ObjectCacheConfig,
    SiteConfiguration,
    SiteUrls,
)
from .constants import ConstantRegistry

__all__ = [
    "AuthSecrets",
    "BehaviorFlags",
    "ConstantRegistry",
    "DatabaseConfig",
    "InvocationMode",
    "MultisiteConfig",
    "ObjectCacheConfig",
    "SiteConfiguration",
    "SiteUrls",
]
