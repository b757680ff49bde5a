"""Shared fixtures: an in-memory SQLite database standing in for PostGIS."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agri_dashboard.database import get_db
from agri_dashboard.main import app


def square(lng: float, lat: float, size: float = 1.0) -> dict:
    return {
        "type": "Polygon",
        "coordinates": [[[lng, lat], [lng + size, lat], [lng + size, lat + size], [lng, lat + size], [lng, lat]]],
    }


SCHEMA = [
    "CREATE TABLE region (gid INTEGER PRIMARY KEY, adm1_en TEXT, adm1_pcode TEXT, geom TEXT)",
    "CREATE TABLE zone (gid INTEGER PRIMARY KEY, adm1_en TEXT, adm1_pcode TEXT, adm2_en TEXT, adm2_pcode TEXT, geom TEXT)",
    "CREATE TABLE woreda (gid INTEGER PRIMARY KEY, adm1_en TEXT, adm1_pcode TEXT, adm2_en TEXT, adm2_pcode TEXT, "
    "adm3_en TEXT, adm3_pcode TEXT, geom TEXT)",
    "CREATE TABLE stations (id INTEGER PRIMARY KEY, geom TEXT)",
    "CREATE TABLE agricultural_lands (id INTEGER PRIMARY KEY, name TEXT, region TEXT, major_crops TEXT, land_size, "
    "soil_type TEXT, suitability TEXT, challenges TEXT, image TEXT, geom TEXT)",
    # Untyped metric columns keep values as inserted ("30°C" stays text, 20.0 stays real)
    "CREATE TABLE r_weather_data (id INTEGER PRIMARY KEY, adm1_en TEXT, adm1_pcode TEXT, year INTEGER, "
    "avg_annual_precipitation_mm_day, avg_annual_max_temperature_c, avg_annual_min_temperature_c)",
    "CREATE TABLE land (id INTEGER PRIMARY KEY, adm1_en TEXT, adm1_pcode TEXT, year INTEGER, "
    "total_agri_land, plowed_area, sowed_land, harvested_land)",
    "CREATE TABLE pest_data (id INTEGER PRIMARY KEY, adm1_en TEXT, adm1_pcode TEXT, year INTEGER, "
    "pest_incidence, affected_area_ha, crop_loss_tons, pest_control_cost_etb)",
]

REGIONS = [
    (1, "Amhara", "ET14", square(37, 10, 2)),
    (2, "Oromia", "ET04", square(36, 6, 3)),
    (3, "Somali", "ET05", {"type": "MultiPolygon", "coordinates": [square(42, 5)["coordinates"],
                                                                      square(44, 7)["coordinates"]]}),
    (4, "Afar", "ET02", {"type": "Point", "coordinates": [41, 12]}),
]

WEATHER_ROWS = [
    (1, "Amhara", "ET14", 2020, 2.5, "30°C", "12°C"),
    (2, "Oromia", "ET04", 2020, 1.0, 20.0, 10.0),
    (3, "Somali", "ET05", 2020, None, "N/A", None),
    (4, "Amhara", "ET14", 2019, 3.0, 10.0, 5.0),
]


def seed(conn) -> None:
    for statement in SCHEMA:
        conn.execute(text(statement))

    for gid, name, code, geometry in REGIONS:
        conn.execute(
            text("INSERT INTO region VALUES (:gid, :name, :code, :geom)"),
            {"gid": gid, "name": name, "code": code, "geom": json.dumps(geometry)},
        )
    conn.execute(
        text("INSERT INTO zone VALUES (1, 'Amhara', 'ET14', 'North Gondar', 'ET1401', :geom)"),
        {"geom": json.dumps(square(37, 12))},
    )
    conn.execute(
        text("INSERT INTO woreda VALUES (1, 'Amhara', 'ET14', 'North Gondar', 'ET1401', 'Dabat', 'ET140101', :geom)"),
        {"geom": json.dumps(square(37.5, 12.5, 0.5))},
    )
    conn.execute(
        text("INSERT INTO stations VALUES (1, :geom)"),
        {"geom": json.dumps({"type": "Point", "coordinates": [38.74, 9.03]})},
    )
    conn.execute(
        text("INSERT INTO agricultural_lands VALUES (1, 'Bahir Dar Farm', 'Amhara', 'Teff, Maize', '1200 ha', "
             "'Vertisol', 'High', 'Waterlogging', NULL, :geom)"),
        {"geom": json.dumps({"type": "Point", "coordinates": [37.39, 11.59]})},
    )

    for row in WEATHER_ROWS:
        conn.execute(text("INSERT INTO r_weather_data VALUES (:id, :n, :c, :y, :p, :mx, :mn)"),
                     dict(zip(("id", "n", "c", "y", "p", "mx", "mn"), row)))
    conn.execute(text("INSERT INTO land VALUES (1, 'Amhara', 'ET14', 2024, 4500000, 3000000, 2800000, 2600000)"))
    conn.execute(text("INSERT INTO land VALUES (2, 'Oromia', 'ET04', 2024, 6000000, 4100000, 3900000, 3500000)"))
    conn.execute(text("INSERT INTO pest_data VALUES (1, 'Amhara', 'ET14', 2024, 12.5, 3400, 800, 150000)"))
    conn.execute(text("INSERT INTO pest_data VALUES (2, 'Oromia', 'ET04', 2024, 4.0, 1200, 300, 90000)"))


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)

    @event.listens_for(engine, "connect")
    def register_functions(dbapi_connection, connection_record):
        # Geometry is stored as GeoJSON text already
        dbapi_connection.create_function("ST_AsGeoJSON", 1, lambda geom: geom)

    with engine.begin() as conn:
        seed(conn)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
