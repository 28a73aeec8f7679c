import itertools
import os
import tempfile

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="stock-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models.category import Category
from models.depot import Depot
from models.product import Product
from utils import storage


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(storage, "UPLOAD_DIR", path)
    return path


@pytest.fixture
def client(session_factory, upload_dir):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def category(db):
    c = Category(name="Peripherals")
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


@pytest.fixture
def depot(db):
    d = Depot(name="Main depot", address="1 Dock Street")
    db.add(d)
    db.commit()
    db.refresh(d)
    return d


@pytest.fixture
def make_product(db, category, depot):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = dict(
            name=f"Product {n}",
            reference=f"T-{n:03d}",
            purchase_price=0.0,
            sale_price=0.0,
            quantity=0,
            category_id=category.id,
            depot_id=depot.id,
        )
        data.update(overrides)
        product = Product(**data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make
