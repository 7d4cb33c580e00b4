import argparse
import logging

from timekeeper.database.base import Base
from timekeeper.database.session import check_connection, engine, get_database_status
from timekeeper.models import project, task, time_entry, user  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(reset: bool = False) -> dict:
    if not check_connection():
        raise RuntimeError("Database connection failed")

    if reset:
        # destroys every row
        logger.warning("Dropping all tables")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    status = get_database_status()
    logger.info("Database initialized with %s tables", status["tableCount"])
    return status


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the Timekeeper schema")
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    status = init_db(reset=args.reset)
    print(f"Database ready: {status['tableCount']} tables")


if __name__ == "__main__":
    main()
