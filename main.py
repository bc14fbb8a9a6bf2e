#!/usr/bin/env python3
"""
Campus Navigator - Main Entry Point

Runs the Flask web application serving the campus page and the auth API.

Usage:
    python main.py
    python main.py --port 4000 --debug
    python main.py --init-db
"""

import argparse
import logging

from config.settings import Settings


def main():
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Campus Navigator")
    parser.add_argument("--host", default="0.0.0.0", help="Web app host")
    parser.add_argument("--port", type=int, default=settings.port, help="Web app port")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("--init-db", action="store_true",
                        help="Create database tables and exit")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger("campus_navigator")

    if args.init_db:
        from config.database import configure_database, init_database
        configure_database(settings.database_url)
        init_database()
        return

    from webapp.app import create_app
    app = create_app(settings)
    logger.info(f"API running on http://{args.host}:{args.port}")
    logger.info(f"Allowed client origin: {settings.client_origin}")
    logger.info(f"Debug mode: {'ON' if args.debug else 'OFF'}")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
