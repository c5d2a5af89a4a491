"""Shared pytest fixtures: in-memory database, demo users, API client."""

import os

# Must be set before any application module reads the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_USERS"] = "false"

from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
import models.reference  # noqa: F401
import models.stock  # noqa: F401
import models.sales  # noqa: F401
import models.log  # noqa: F401
from models.product import Product
from models.purchase import Purchase
from models.users import User
from populate_db import seed_demo_users
from schemas.product import ProductCreate
from schemas.purchase import PurchaseCreate
from services import products as catalog
from services import purchases
from utils.tokenJWT import create_access_token


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db(engine) -> Iterator[Session]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    seed_demo_users(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def users(db) -> Dict[str, User]:
    """Demo users keyed by username (admin, manager, warehouse, cashier)."""
    return {u.username: u for u in db.query(User).all()}


@pytest.fixture
def make_product(db) -> Callable[..., Product]:
    counter = {"n": 0}

    def _make(kode_brg: str = None, **overrides):
        counter["n"] += 1
        fields = dict(
            kode_brg=kode_brg or f"BRG{counter['n']:03d}",
            nama_brg=f"Product {counter['n']}",
            satuan_default="PCS",
            isi_per_satuan=Decimal("1"),
            harga_beli=Decimal("2500"),
            harga_jual=Decimal("3000"),
            stok_min=Decimal("10"),
            stok_max=Decimal("100"),
        )
        fields.update(overrides)
        return catalog.create_product(db, ProductCreate(**fields))

    return _make


@pytest.fixture
def receive(db, users) -> Callable[..., Purchase]:
    """Book goods in through a purchase line, the normal way stock arrives."""
    counter = {"n": 0}

    def _receive(product, jumlah, f_beli: str = None, **overrides):
        counter["n"] += 1
        fields = dict(
            f_beli=f_beli or f"PB-{counter['n']:04d}",
            tgl_beli=date(2024, 1, 15),
            kode_brg=product.kode_brg,
            nama_brg=product.nama_brg,
            jumlah=Decimal(str(jumlah)),
            satuan=product.satuan_default,
            hrg_beli=product.harga_beli,
        )
        fields.update(overrides)
        return purchases.create_purchase(db, PurchaseCreate(**fields), actor_id=users["warehouse"].id)

    return _receive


@pytest.fixture
def client(db) -> Iterator[TestClient]:
    from main import app

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth() -> Callable[[str], Dict[str, str]]:
    """Bearer header for a demo user by username."""

    def _headers(username: str) -> Dict[str, str]:
        token = create_access_token({"sub": username})
        return {"Authorization": f"Bearer {token}"}

    return _headers
