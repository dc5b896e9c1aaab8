"""
Product catalog.

Layers:
- catalog.domain: Product entity, failures, repository contract, use cases
- catalog.data: wire models, remote/local data sources, repositories
- catalog.container: wiring of the layers from configuration
- catalog.api: FastAPI surface over the use cases
- catalog.console: standalone menu-driven product manager
"""

__version__ = "1.0.0"
