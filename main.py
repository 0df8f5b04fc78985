"""
main.py
-------
Entry point for the GuideResto console application.

Responsibilities:
    - Open the database connection and make sure the schema exists.
    - Wire the unit of work, mappers and services.
    - Run the console menu, then close the connection.
"""

import psycopg2

from console.menu import ConsoleApp
from db.connection import ConnectionProvider
from db.init_db import create_tables
from db.unit_of_work import UnitOfWork
from mappers.persistence_helper import PersistenceHelper
from mappers.registry import MapperRegistry
from services.evaluation_service import EvaluationService
from services.restaurant_service import RestaurantService
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Initialize the application and run the menu."""

    provider = ConnectionProvider()
    try:
        # ── 1. Database setup ─────────────────────────────
        logger.info("Initializing database...")
        uow = UnitOfWork(provider)
        create_tables(uow)

        # ── 2. Wiring ─────────────────────────────────────
        mappers = MapperRegistry.build(uow)
        helper = PersistenceHelper(mappers)
        app = ConsoleApp(
            restaurants=RestaurantService(mappers, helper),
            evaluations=EvaluationService(mappers),
        )

        # ── 3. Run ────────────────────────────────────────
        app.run()
    except (KeyboardInterrupt, EOFError):
        logger.info("Interrupted by user.")
    except psycopg2.Error as e:
        logger.error(f"Database unavailable, stopping: {e}")
    finally:
        provider.close()
        logger.info("GuideResto stopped.")


if __name__ == "__main__":
    main()
