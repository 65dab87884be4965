"""
Create the ledger tables. Run once per environment before starting the API:

    python -m scripts.init_db
"""
from sqlalchemy import inspect

from app.core.logging import setup_logging
from app.database import engine, init_db


def main():
    setup_logging()
    init_db()
    print("Tables in DB:")
    for table in inspect(engine).get_table_names():
        print(f" - {table}")


if __name__ == "__main__":
    main()
