"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from catalog.api.dependencies import api_key_protection, container_dependency
from catalog.container import Container, get_container
from catalog.data.models import ProductModel
from catalog.data.repository import ProductRepositoryImpl
from catalog.domain.failures import Failure
from catalog.domain.product import Product
from catalog.domain.usecases import (
    CreateProductParams,
    DeleteProductParams,
    NoParams,
    SearchProductsParams,
    UpdateProductParams,
    ViewProductParams,
)
from catalog.error_handler import ErrorHandler

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Initialize FastAPI app
app = FastAPI(
    title="Product Catalog API",
    description="Product catalog backed by a remote source with a local cache fallback",
    version=API_VERSION,
    dependencies=[Depends(api_key_protection)],
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

error_handler = ErrorHandler()


# ============================================================================
# REQUEST MODELS
# ============================================================================

class ProductPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""
    image_url: str = Field(default="", alias="imageUrl")
    price: float = 0.0


def _to_dict(product: Product) -> Dict[str, Any]:
    return ProductModel.from_entity(product).to_map()


def _validated(product: Product) -> Product:
    errors = product.validation_errors()
    if errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Invalid product", "errors": errors},
        )
    return product


def _cached_repository(container: Container) -> ProductRepositoryImpl:
    repository = container.product_repository
    if not isinstance(repository, ProductRepositoryImpl):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The configured repository has no local cache.",
        )
    return repository


@app.exception_handler(Failure)
async def failure_handler(request: Request, exc: Failure):
    status_code, body = error_handler.to_response(exc, {"path": request.url.path})
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    status_code, body = error_handler.to_response(exc, {"path": request.url.path})
    return JSONResponse(status_code=status_code, content=body)


# ============================================================================
# HEALTH
# ============================================================================

@app.get("/", tags=["Health"])
async def root():
    return {"service": "Product Catalog API", "status": "healthy", "version": API_VERSION, "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check(container: Container = Depends(container_dependency)):
    """Health check with the active data source wiring."""
    return {
        "status": "healthy",
        "repository": type(container.product_repository).__name__,
        "remote": type(container.remote_data_source).__name__,
        "timestamp": datetime.now().isoformat(),
    }


# ============================================================================
# PRODUCTS
# ============================================================================

products_router = APIRouter(prefix="/api/v1/products", tags=["Products"])


@products_router.get("")
async def list_products(container: Container = Depends(container_dependency)) -> List[Dict[str, Any]]:
    products = await container.view_all_products(NoParams())
    return [_to_dict(p) for p in products]


@products_router.get("/search")
async def search_products(
    q: str = Query(default="", description="Matches product name or description"),
    container: Container = Depends(container_dependency),
) -> List[Dict[str, Any]]:
    products = await container.search_products(SearchProductsParams(q))
    return [_to_dict(p) for p in products]


@products_router.get("/{product_id}")
async def get_product(product_id: str, container: Container = Depends(container_dependency)):
    product = await container.view_product(ViewProductParams(product_id))
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")
    return _to_dict(product)


@products_router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductPayload, container: Container = Depends(container_dependency)):
    product = _validated(Product.create(payload.name, payload.description, payload.image_url, payload.price))
    created = await container.create_product(CreateProductParams(product))
    logger.info("Product created via API id=%s", created.id)
    return _to_dict(created)


@products_router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: ProductPayload,
    container: Container = Depends(container_dependency),
):
    product = _validated(
        Product(
            id=product_id,
            name=payload.name,
            description=payload.description,
            image_url=payload.image_url,
            price=payload.price,
        )
    )
    updated = await container.update_product(UpdateProductParams(product))
    return _to_dict(updated)


@products_router.delete("/{product_id}")
async def delete_product(product_id: str, container: Container = Depends(container_dependency)):
    deleted = await container.delete_product(DeleteProductParams(product_id))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")
    return {"deleted": True, "id": product_id}


# ============================================================================
# CACHE & NETWORK
# ============================================================================

maintenance_router = APIRouter(prefix="/api/v1", tags=["Maintenance"])


@maintenance_router.get("/cache")
async def cache_info(container: Container = Depends(container_dependency)):
    info = await _cached_repository(container).get_cache_info()
    return info.model_dump(mode="json")


@maintenance_router.delete("/cache")
async def clear_cache(container: Container = Depends(container_dependency)):
    await _cached_repository(container).clear_cache()
    return {"cleared": True}


@maintenance_router.post("/cache/refresh")
async def refresh_cache(container: Container = Depends(container_dependency)):
    products = await _cached_repository(container).refresh_data()
    return {"refreshed": len(products), "products": [_to_dict(p) for p in products]}


@maintenance_router.get("/network")
async def network_info(container: Container = Depends(container_dependency)):
    info = await _cached_repository(container).get_network_info()
    return info.model_dump()


app.include_router(products_router)
app.include_router(maintenance_router)


@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("Starting Product Catalog API...")
    await get_container().initialize()


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Product Catalog API...")
    get_container().dispose()
