"""
Script to create the tables and seed demo content into an empty database.
"""
import sys
from sqlmodel import Session
from app.core.database import engine, init_db
from app.services.seed_service import seed_demo_data
import logging

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


if __name__ == "__main__":
    logger.info("Starting demo data seeding...")
    try:
        init_db()
        with Session(engine) as session:
            if seed_demo_data(session):
                logger.info("Successfully completed!")
            else:
                logger.info("Database already has content, nothing seeded")
    except Exception as e:
        logger.error("Error during seeding: %s", e, exc_info=True)
        sys.exit(1)
