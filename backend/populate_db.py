"""Seed a fresh database with demo accounts and a small starter catalog.

Run from the backend folder:  python populate_db.py
"""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from database import SessionLocal, init_db
from models.product import Product
from models.reference import Category, Unit
from models.users import User, UserRole
from utils.hashing import get_password_hash
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

# username -> role; the password is "<username>123"
DEMO_USERS = {
    "admin": UserRole.ADMIN,
    "manager": UserRole.MANAGER,
    "warehouse": UserRole.WAREHOUSE,
    "cashier": UserRole.CASHIER,
}

DEMO_UNITS = [
    ("Pieces", "PCS", Decimal("1")),
    ("Box", "BOX", Decimal("12")),
    ("Carton", "CTN", Decimal("48")),
]

DEMO_PRODUCTS = [
    # kode_brg, nama_brg, category, unit, harga_beli, harga_jual, stok_min, stok_max
    ("BRG001", "Indomie Goreng", "Food", "PCS", "2500", "3000", "24", "240"),
    ("BRG002", "Aqua 600ml", "Beverages", "PCS", "2800", "3500", "24", "480"),
    ("BRG003", "Teh Botol Sosro", "Beverages", "PCS", "3200", "4000", "12", "240"),
    ("BRG004", "Sabun Lifebuoy", "Toiletries", "PCS", "3500", "4500", "10", "120"),
]


def seed_demo_users(db: Session) -> int:
    """Create the demo accounts when the users table is empty. Returns how many were added."""
    if db.query(User.id).first() is not None:
        return 0

    for username, role in DEMO_USERS.items():
        db.add(User(
            username=username,
            email=f"{username}@minimarket.local",
            password_hash=get_password_hash(f"{username}123"),
            role=role.value,
        ))
    db.commit()
    logger.info("Seeded %s demo users", len(DEMO_USERS))
    return len(DEMO_USERS)


def seed_demo_catalog(db: Session) -> int:
    """Categories, units and a few products at zero stock; skipped when products exist."""
    if db.query(Product.id).first() is not None:
        return 0

    base_unit = None
    for name, abbreviation, factor in DEMO_UNITS:
        unit = Unit(name=name, abbreviation=abbreviation, conversion_factor=factor,
                    base_unit_id=base_unit.id if base_unit else None)
        db.add(unit)
        db.flush()
        base_unit = base_unit or unit

    categories = {}
    for kode, nama, category_name, unit, beli, jual, smin, smax in DEMO_PRODUCTS:
        if category_name not in categories:
            category = Category(name=category_name)
            db.add(category)
            db.flush()
            categories[category_name] = category

        db.add(Product(
            kode_brg=kode,
            nama_brg=nama,
            kategori_id=categories[category_name].id,
            satuan_default=unit,
            isi_per_satuan=Decimal("1"),
            harga_beli=Decimal(beli),
            harga_jual=Decimal(jual),
            stok_min=Decimal(smin),
            stok_max=Decimal(smax),
            current_stock=Decimal("0"),
        ))
    db.commit()
    logger.info("Seeded %s demo products", len(DEMO_PRODUCTS))
    return len(DEMO_PRODUCTS)


if __name__ == "__main__":
    setup_logging()
    init_db()
    session = SessionLocal()
    try:
        seed_demo_users(session)
        seed_demo_catalog(session)
    finally:
        session.close()
