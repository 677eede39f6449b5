from sqlalchemy_utils import database_exists, create_database

from vidvoice.core.database.connection import engine, create_tables

# Creates the database (if the backend needs it) and every vidvoice table.
if not database_exists(engine.url):
    print(f"Creating database at {engine.url}...")
    create_database(engine.url)

create_tables()
print("✅ vidvoice tables are ready.")
