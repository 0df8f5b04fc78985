"""
db/init_db.py
-------------
Creates the database schema (sequences, id triggers, tables) if it does not
already exist. Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.unit_of_work import UnitOfWork
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- One sequence per table; both evaluation kinds share seq_evaluations
CREATE SEQUENCE IF NOT EXISTS seq_cities;
CREATE SEQUENCE IF NOT EXISTS seq_restaurant_types;
CREATE SEQUENCE IF NOT EXISTS seq_evaluation_criteria;
CREATE SEQUENCE IF NOT EXISTS seq_restaurants;
CREATE SEQUENCE IF NOT EXISTS seq_evaluations;
CREATE SEQUENCE IF NOT EXISTS seq_grades;

-- Trigger function: assigns NEW.id from the sequence named in TG_ARGV[0]
CREATE OR REPLACE FUNCTION assign_id_from_sequence() RETURNS trigger AS $$
BEGIN
    NEW.id := nextval(TG_ARGV[0]);
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;

CREATE TABLE IF NOT EXISTS cities (
    id              INTEGER PRIMARY KEY,
    zip_code        VARCHAR(10) NOT NULL,
    name            VARCHAR(100) NOT NULL
);

CREATE TABLE IF NOT EXISTS restaurant_types (
    id              INTEGER PRIMARY KEY,
    label           VARCHAR(100) NOT NULL UNIQUE,
    description     TEXT
);

CREATE TABLE IF NOT EXISTS evaluation_criteria (
    id              INTEGER PRIMARY KEY,
    name            VARCHAR(100) NOT NULL UNIQUE,
    description     TEXT
);

CREATE TABLE IF NOT EXISTS restaurants (
    id              INTEGER PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    street          VARCHAR(100) NOT NULL,
    description     TEXT,
    website         VARCHAR(100),
    type_id         INTEGER NOT NULL REFERENCES restaurant_types(id),
    city_id         INTEGER NOT NULL REFERENCES cities(id)
);

CREATE TABLE IF NOT EXISTS basic_evaluations (
    id              INTEGER PRIMARY KEY,
    appreciation    CHAR(1) NOT NULL CHECK (appreciation IN ('T', 'F')),
    visit_date      DATE NOT NULL,
    ip_address      VARCHAR(100) NOT NULL,
    restaurant_id   INTEGER NOT NULL REFERENCES restaurants(id)
);

CREATE TABLE IF NOT EXISTS complete_evaluations (
    id              INTEGER PRIMARY KEY,
    visit_date      DATE NOT NULL,
    comment         TEXT,
    username        VARCHAR(100) NOT NULL,
    restaurant_id   INTEGER NOT NULL REFERENCES restaurants(id)
);

CREATE TABLE IF NOT EXISTS grades (
    id              INTEGER PRIMARY KEY,
    grade           INTEGER NOT NULL,
    evaluation_id   INTEGER NOT NULL REFERENCES complete_evaluations(id),
    criteria_id     INTEGER NOT NULL REFERENCES evaluation_criteria(id)
);

CREATE OR REPLACE TRIGGER trg_cities_id BEFORE INSERT ON cities
    FOR EACH ROW EXECUTE FUNCTION assign_id_from_sequence('seq_cities');
CREATE OR REPLACE TRIGGER trg_restaurant_types_id BEFORE INSERT ON restaurant_types
    FOR EACH ROW EXECUTE FUNCTION assign_id_from_sequence('seq_restaurant_types');
CREATE OR REPLACE TRIGGER trg_evaluation_criteria_id BEFORE INSERT ON evaluation_criteria
    FOR EACH ROW EXECUTE FUNCTION assign_id_from_sequence('seq_evaluation_criteria');
CREATE OR REPLACE TRIGGER trg_restaurants_id BEFORE INSERT ON restaurants
    FOR EACH ROW EXECUTE FUNCTION assign_id_from_sequence('seq_restaurants');
CREATE OR REPLACE TRIGGER trg_basic_evaluations_id BEFORE INSERT ON basic_evaluations
    FOR EACH ROW EXECUTE FUNCTION assign_id_from_sequence('seq_evaluations');
CREATE OR REPLACE TRIGGER trg_complete_evaluations_id BEFORE INSERT ON complete_evaluations
    FOR EACH ROW EXECUTE FUNCTION assign_id_from_sequence('seq_evaluations');
CREATE OR REPLACE TRIGGER trg_grades_id BEFORE INSERT ON grades
    FOR EACH ROW EXECUTE FUNCTION assign_id_from_sequence('seq_grades');
"""


def create_tables(uow: UnitOfWork) -> None:
    """
    Execute the schema SQL to create all sequences, triggers and tables.
    Safe to call multiple times.
    """
    try:
        uow.execute(SCHEMA_SQL)
        uow.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        uow.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import ConnectionProvider

    provider = ConnectionProvider()
    try:
        create_tables(UnitOfWork(provider))
    finally:
        provider.close()
    print("Database schema created successfully.")
