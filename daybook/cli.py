"""
Daybook Backend CLI Interface
Command line interface implemented using Typer
"""

import json
from typing import Optional

import typer
import uvicorn

from daybook.config.loader import get_config
from daybook.core.logger import get_logger, setup_logging

logger = get_logger(__name__)


def _load(config_file: Optional[str]):
    config = get_config(config_file)
    if config_file:
        setup_logging()
    return config


def start(
    host: Optional[str] = typer.Option(None, help="Server host address"),
    port: Optional[int] = typer.Option(None, help="Server port"),
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
    debug: bool = typer.Option(False, help="Enable debug mode"),
):
    """Start Daybook Backend service"""
    try:
        config = _load(config_file)
        host = host or config.get("server.host", "0.0.0.0")
        port = port or int(config.get("server.port", 5000))
        debug = debug or bool(config.get("server.debug", False))

        logger.info("Starting Daybook Backend service...")
        logger.info(f"Host: {host}, Port: {port}")
        logger.info(f"Debug mode: {debug}")

        uvicorn.run(
            "daybook.app:app",
            host=host,
            port=port,
            reload=debug,
            log_level="debug" if debug else "info",
        )

    except Exception as e:
        logger.error(f"Failed to start service: {e}")
        raise typer.Exit(1)


def init_db(
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
):
    """Initialize database (create indexes)"""
    _load(config_file)
    from daybook.core.db import get_db

    try:
        db = get_db()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise typer.Exit(1)
    typer.echo(f"Database ready: {db.db.name}")


def migrate_legacy(
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
):
    """Convert string-based category/subcategory fields on activities into id references"""
    _load(config_file)
    from daybook.core.legacy import import_legacy_activities

    summary = import_legacy_activities()
    typer.echo(
        f"Updated: {summary['updated']}, skipped: {summary['skipped']}, "
        f"errors: {summary['errors']}, total: {summary['total']}"
    )
    if summary["errors"]:
        raise typer.Exit(1)


def categories(
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
):
    """Print all categories with their subcategories as JSON"""
    _load(config_file)
    from daybook.core.categories import CategoryStore, category_info

    docs = CategoryStore().list_categories()
    typer.echo(json.dumps([category_info(d).model_dump(mode="json") for d in docs], indent=2))


def build_app() -> typer.Typer:
    app = typer.Typer(help="Daybook backend")

    app.command()(start)
    app.command("init-db")(init_db)
    app.command("migrate-legacy")(migrate_legacy)
    app.command()(categories)

    return app


def main():
    """Main function"""
    build_app()()


if __name__ == "__main__":
    main()
