"""Build-time content hooks: slugs, permalinks, category indexes and ranks."""

from .config import ConfigError, SiteConfig, load_config
from .models import Document, IndexPage, Page, Site
from .pipeline import Hook, default_hooks, run
from .slug import SlugMode, slugify

__all__ = [
    "ConfigError",
    "Document",
    "Hook",
    "IndexPage",
    "Page",
    "Site",
    "SiteConfig",
    "SlugMode",
    "default_hooks",
    "load_config",
    "run",
    "slugify",
]
