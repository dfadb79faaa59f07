import sys
import os
import traceback

# Run from the project root: python tests/verify_models.py
sys.path.append(os.getcwd())

print("Checking box office models...")

try:
    from sqlalchemy.orm import configure_mappers
    from sqlalchemy.dialects import postgresql
    from sqlalchemy.schema import CreateTable

    from boxoffice.db.base import Base
    print(f"Models loaded: {len(Base.metadata.tables)} tables.")

    configure_mappers()
    print("ORM mappings are valid.")

    # DDL only; nothing is sent to the store
    dialect = postgresql.dialect()
    for table in Base.metadata.sorted_tables:
        CreateTable(table).compile(dialect=dialect)
        print(f"  {table.name}: ok")

    print("SUCCESS: models verified.")

except Exception:
    print("FAILURE: model verification failed.")
    traceback.print_exc()
    sys.exit(1)
