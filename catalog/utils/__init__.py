"""
Utility modules for the catalog
"""
from .config_loader import CacheConfig, CatalogConfig, RemoteConfig, load_catalog_config

__all__ = [
    'CatalogConfig',
    'RemoteConfig',
    'CacheConfig',
    'load_catalog_config',
]
