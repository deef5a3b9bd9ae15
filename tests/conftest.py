"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.gateway import Gateway
from app.services.institution import get_institution_service
from app.services.interview import get_interview_service
from app.services.interviewee import get_interviewee_service
from app.services.researcher import get_researcher_service


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="gateway")
def gateway_fixture(db_session: Session) -> Gateway:
    return Gateway(db_session)


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """Create a test client with overridden DB dependency and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="institution")
def institution_fixture(gateway: Gateway) -> dict:
    result = get_institution_service().create(gateway, {"codigo": "fuab", "nombre": "Fundación Abrazo"})
    assert result.success, result.error
    return result.data


@pytest.fixture(name="interviewee")
def interviewee_fixture(gateway: Gateway, institution: dict) -> dict:
    result = get_interviewee_service().create(
        gateway,
        {"codigo": "ENT01", "nombre": "Marta", "apellido": "Rivas", "institucion_id": institution["id"]},
    )
    assert result.success, result.error
    return result.data


@pytest.fixture(name="researcher")
def researcher_fixture(gateway: Gateway) -> dict:
    result = get_researcher_service().create(gateway, {"codigo": "INV01", "nombre": "Luis", "apellido": "Pardo"})
    assert result.success, result.error
    return result.data


@pytest.fixture(name="interview")
def interview_fixture(gateway: Gateway, institution: dict, interviewee: dict, researcher: dict) -> dict:
    """Interview FUAB01 with every reference filled in."""
    result = get_interview_service().create(
        gateway,
        {
            "codigo_entrevista": "FUAB01",
            "institucion_id": institution["id"],
            "entrevistado_id": interviewee["id"],
            "investigador_id": researcher["id"],
            "numero_entrevista": 1,
        },
    )
    assert result.success, result.error
    return result.data
