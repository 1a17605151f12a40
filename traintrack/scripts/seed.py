"""
Insert reference data (roles, licences, units, machine categories) into empty tables:
  python -m traintrack.scripts.seed
"""
import argparse
import sys

from traintrack.core.config import settings
from traintrack.core.database import SessionLocal
from traintrack.core.logging_setup import configure_logging
from traintrack.services.seed import seed_all


def main() -> int:
    argparse.ArgumentParser(description="Seed TrainTrack reference data.").parse_args()
    configure_logging(settings)
    with SessionLocal() as db:
        inserted = seed_all(db)
    for table, count in inserted.items():
        print(f"{table}: {count} rows inserted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
