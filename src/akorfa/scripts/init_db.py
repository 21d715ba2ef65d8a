# src/akorfa/scripts/init_db.py
"""Create, drop or migrate the configured ledger database."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

import psycopg
from alembic import command
from alembic.config import Config
from psycopg import sql
from sqlalchemy.exc import SQLAlchemyError

from akorfa.core.settings import settings
from akorfa.db.session import create_tables, drop_tables

logger = logging.getLogger("akorfa.init_db")

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def normalize_to_psycopg(uri: str) -> str:
    """Return a Postgres URI suitable for ``psycopg.connect()``.

    SQLAlchemy driver suffixes (``postgresql+psycopg``) are stripped.
    """
    uri = (uri or "").strip().strip("'\"")
    if not uri:
        raise ValueError("DATABASE_URL is empty")
    parts = urlsplit(uri)
    scheme = parts.scheme
    if scheme.startswith("postgresql+"):
        scheme = "postgresql"
    if scheme != "postgresql":
        raise ValueError(f"Not a Postgres URL: {uri!r}")
    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def ensure_database_exists(db_url: str) -> bool:
    """Create the Postgres database named in ``db_url`` if it is missing.

    Returns True when the database was created.
    """
    parts = urlsplit(normalize_to_psycopg(db_url))
    target_db = parts.path.lstrip("/") or "postgres"
    admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, ""))
    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is not None:
            logger.info("Database %s already exists", target_db)
            return False
        cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
    logger.info("Created database %s", target_db)
    return True


def run_upgrade_head(db_url: str) -> None:
    """Apply every Alembic revision to ``db_url``."""
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(cfg, "head")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the Akorfa ledger database")
    parser.add_argument(
        "action",
        choices=("create", "drop", "ensure", "migrate"),
        help=(
            "create/drop tables from the models, ensure the Postgres database "
            "exists, or migrate to the latest Alembic revision"
        ),
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL for ensure/migrate (defaults to settings)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper(), format="[init_db] %(message)s")
    url = args.url or settings.database_url_sync
    try:
        if args.action == "create":
            create_tables()
            logger.info("Tables created")
        elif args.action == "drop":
            drop_tables()
            logger.info("Tables dropped")
        elif args.action == "ensure":
            ensure_database_exists(url)
        else:
            run_upgrade_head(url)
    except (ValueError, psycopg.Error, SQLAlchemyError) as exc:
        logger.error("ERROR: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
