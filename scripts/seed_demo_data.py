import sys
import os

# Add project root to python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from solarview.core.database import SessionLocal, init_db
from solarview.core.logger import logger
from solarview.storage.seed import seed_demo_data
from solarview.storage.store import SqlDocumentStore


def main():
    """
    Creates the tables and loads the demo clients, installations and installer report.
    Does nothing when installations already exist.
    """
    init_db()
    db = SessionLocal()
    try:
        if seed_demo_data(SqlDocumentStore(db)):
            logger.info("Seeding completed.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
