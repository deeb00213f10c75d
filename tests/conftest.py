"""
Test configuration and fixtures for StockDepo
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from stockdepo.main import app
from stockdepo.config.database import get_db, Base
from stockdepo.shared.database.models import Producto, Deposito

# In-memory SQLite shared across the connections of one test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client with the database dependency overridden"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass
    
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def producto(db_session: Session) -> Producto:
    producto = Producto(codigo="P-001", nombre="Yerba 1kg", descripcion="Paquete", stock=0)
    db_session.add(producto)
    db_session.commit()
    db_session.refresh(producto)
    return producto

@pytest.fixture
def deposito(db_session: Session) -> Deposito:
    deposito = Deposito(nombre="Central", descripcion="Depósito principal")
    db_session.add(deposito)
    db_session.commit()
    db_session.refresh(deposito)
    return deposito

@pytest.fixture
def deposito_norte(db_session: Session) -> Deposito:
    deposito = Deposito(nombre="Norte", descripcion="")
    db_session.add(deposito)
    db_session.commit()
    db_session.refresh(deposito)
    return deposito
