"""
Product data sources.

- remote: RemoteDataSource contract + SimulatedRemoteDataSource
- remote_http: HttpRemoteDataSource for a real catalog API
- local: LocalDataSource contract + InMemoryLocalDataSource cache

Both remote implementations follow the same contract; the choice between
them happens in `catalog.container` only.
"""

from .local import InMemoryLocalDataSource, LocalDataSource
from .remote import SEED_PRODUCTS, RemoteDataSource, SimulatedRemoteDataSource
from .remote_http import HttpRemoteDataSource

__all__ = [
    "LocalDataSource",
    "InMemoryLocalDataSource",
    "RemoteDataSource",
    "SimulatedRemoteDataSource",
    "HttpRemoteDataSource",
    "SEED_PRODUCTS",
]
