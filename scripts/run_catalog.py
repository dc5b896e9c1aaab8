#!/usr/bin/env python3
"""
One-shot catalog commands against the configured repository.

Examples:
  python scripts/run_catalog.py list
  python scripts/run_catalog.py get 2
  python scripts/run_catalog.py search loafers
  python scripts/run_catalog.py create --name "Boots" --description "Winter boots" --image assets/boots.jpg --price 99.5
  python scripts/run_catalog.py delete 3
  python scripts/run_catalog.py cache-info
  python scripts/run_catalog.py --no-latency --error-rate 0 list
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

# Add repo root to path so `catalog.*` imports work when running from scripts/
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.container import Container
from catalog.data.models import ProductModel
from catalog.data.repository import ProductRepositoryImpl
from catalog.domain.failures import Failure
from catalog.domain.product import Product
from catalog.domain.usecases import (
    CreateProductParams,
    DeleteProductParams,
    NoParams,
    SearchProductsParams,
    ViewProductParams,
)
from catalog.utils.config_loader import load_catalog_config


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def _dump(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False, default=str))


def _products(products: List[Product]) -> List[dict]:
    return [ProductModel.from_entity(p).to_map() for p in products]


async def run_command(args: argparse.Namespace, container: Container) -> int:
    if args.command == "list":
        _dump(_products(await container.view_all_products(NoParams())))
    elif args.command == "get":
        product = await container.view_product(ViewProductParams(args.id))
        if product is None:
            print(f"Product '{args.id}' not found", file=sys.stderr)
            return 1
        _dump(ProductModel.from_entity(product).to_map())
    elif args.command == "search":
        _dump(_products(await container.search_products(SearchProductsParams(args.query))))
    elif args.command == "create":
        product = Product.create(args.name, args.description, args.image, args.price)
        errors = product.validation_errors()
        if errors:
            for error in errors:
                print(error, file=sys.stderr)
            return 1
        created = await container.create_product(CreateProductParams(product))
        _dump(ProductModel.from_entity(created).to_map())
    elif args.command == "delete":
        deleted = await container.delete_product(DeleteProductParams(args.id))
        _dump({"deleted": deleted, "id": args.id})
        return 0 if deleted else 1
    else:
        repository = container.product_repository
        if not isinstance(repository, ProductRepositoryImpl):
            print("The configured repository has no local cache.", file=sys.stderr)
            return 1
        if args.command == "cache-info":
            _dump((await repository.get_cache_info()).model_dump(mode="json"))
        elif args.command == "network":
            _dump((await repository.get_network_info()).model_dump())
        elif args.command == "refresh":
            _dump(_products(await repository.refresh_data()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run catalog operations from the command line")
    parser.add_argument("--config", type=Path, default=None, help="Path to catalog config YAML file")
    parser.add_argument("--no-latency", action="store_true", help="Disable simulated delays")
    parser.add_argument("--error-rate", type=float, default=None, help="Override simulated remote error rate")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Optional path to a log file")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List all products")
    get = sub.add_parser("get", help="Show one product")
    get.add_argument("id")
    search = sub.add_parser("search", help="Search by name or description")
    search.add_argument("query", nargs="?", default="")
    create = sub.add_parser("create", help="Create a product")
    create.add_argument("--name", required=True)
    create.add_argument("--description", required=True)
    create.add_argument("--image", required=True, help="Image reference")
    create.add_argument("--price", type=float, required=True)
    delete = sub.add_parser("delete", help="Delete a product")
    delete.add_argument("id")
    sub.add_parser("cache-info", help="Show local cache metadata")
    sub.add_parser("network", help="Show remote connectivity")
    sub.add_parser("refresh", help="Force a remote fetch into the cache")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)
    logger = logging.getLogger(__name__)

    try:
        config = load_catalog_config(args.config)
        if args.no_latency:
            config.latency_scale = 0.0
        if args.error_rate is not None:
            config.remote.error_rate = args.error_rate
        container = Container(config=config)
        return asyncio.run(run_command(args, container))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except Failure as e:
        logger.error("%s: %s", type(e).__name__, e.message)
        return 1
    except Exception as e:
        logger.error("Error: %s: %s", type(e).__name__, str(e), exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
