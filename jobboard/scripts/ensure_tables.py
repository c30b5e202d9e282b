"""
Create any missing tables.
Usage: python -m jobboard.scripts.ensure_tables
"""
from jobboard.database import ensure_tables_exist
from jobboard.logging_config import setup_logging


def main():
    setup_logging()
    ensure_tables_exist()
    print("DB table check complete: created only missing tables.")


if __name__ == "__main__":
    main()
