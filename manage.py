#!/usr/bin/env python3
"""
Management commands for the CMS REST API.

Usage:
    python manage.py init_db
    python manage.py check_db
    python manage.py reset_db
    python manage.py create_menu <name>
    python manage.py create_term <taxonomy> <name>
"""

import re
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, text

from database import engine, get_session
from helpers.nav_menus import NAV_MENU_TAXONOMY
from helpers.registry import get_taxonomy
from settings import logger
# Import all models to ensure tables are created
from models.posts import Post, PostMeta
from models.terms import Term, TermRelationship


def init_db():
    """Initialize database tables."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created successfully")


def check_db():
    """Check database connection and tables."""
    try:
        with next(get_session()) as session:
            result = session.exec(text("SELECT name FROM sqlite_master WHERE type='table'"))
            tables = result.fetchall()
            logger.info(f"Database connected. Found {len(tables)} tables: {[t[0] for t in tables]}")
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        sys.exit(1)


def reset_db():
    """Drop and recreate all database tables."""
    logger.warning("Dropping all database tables...")
    SQLModel.metadata.drop_all(engine)
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database reset successfully")


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def create_term(taxonomy: str, name: str) -> Term:
    """Create a term in a registered taxonomy."""
    if get_taxonomy(taxonomy) is None:
        logger.error(f"Unknown taxonomy: {taxonomy}")
        sys.exit(1)
    try:
        with next(get_session()) as session:
            term = Term(name=name, slug=slugify(name), taxonomy=taxonomy)
            session.add(term)
            session.commit()
            session.refresh(term)

            logger.info(f"Term '{name}' created in '{taxonomy}' with ID: {term.term_id}")
            return term
    except SQLAlchemyError as e:
        logger.error(f"Failed to create term: {e}")
        sys.exit(1)


def create_menu(name: str) -> Term:
    """Create a navigation menu."""
    return create_term(NAV_MENU_TAXONOMY, name)


def main():
    if len(sys.argv) < 2:
        print("Usage: python manage.py <command> [args]")
        print("Commands:")
        print("  init_db                        - Initialize database tables")
        print("  check_db                       - Check database connection")
        print("  reset_db                       - Drop and recreate all tables")
        print("  create_menu <name>             - Create a navigation menu")
        print("  create_term <taxonomy> <name>  - Create a term")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init_db":
        init_db()
    elif command == "check_db":
        check_db()
    elif command == "reset_db":
        reset_db()
    elif command == "create_menu":
        if len(sys.argv) != 3:
            print("Usage: python manage.py create_menu <name>")
            sys.exit(1)
        create_menu(sys.argv[2])
    elif command == "create_term":
        if len(sys.argv) != 4:
            print("Usage: python manage.py create_term <taxonomy> <name>")
            sys.exit(1)
        create_term(sys.argv[2], sys.argv[3])
    else:
        print(f"Unknown command: {command}")
        print("Run 'python manage.py' to see available commands")
        sys.exit(1)


if __name__ == "__main__":
    main()
