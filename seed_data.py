"""
Seed a fresh database with demo doctors and customers
Usage: python seed_data.py [visit_duration_minutes]
"""
import logging
import sys

from vetclinic import models  # noqa: F401
from vetclinic.database import Base, SessionLocal, engine
from vetclinic.seed import seed_demo_data

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def main(argv: list[str]) -> int:
    duration = int(argv[1]) if len(argv) > 1 else None

    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        seed_demo_data(db, visit_duration_minutes=duration)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main(sys.argv))
    except Exception as e:
        logger.error(f"❌ Seeding failed: {e}")
        sys.exit(1)
