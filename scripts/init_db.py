#!/usr/bin/env python3
"""
Initialize the prescription database.

Creates the tables and the counter row (value 0). Safe to run again on an
existing database.
Usage:
    python scripts/init_db.py
    python scripts/init_db.py --database-url sqlite:///./data/receitas.db
"""

import argparse
import logging

from receituario.config import settings
from receituario.database import close_db, create_db_engine, init_db

logger = logging.getLogger("init_db")


def main():
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument(
        "--database-url",
        default=settings.DATABASE_URL,
        help="SQLAlchemy URL (default: DATABASE_URL from environment)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="[init] %(message)s")

    engine = create_db_engine(args.database_url)
    try:
        init_db(engine)
    finally:
        close_db(engine)

    logger.info("banco inicializado em %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    main()
