# services/reference.py
import logging
from typing import List

from sqlalchemy.orm import Session

from models.reference import Category, Unit
from schemas.reference import CategoryCreate, UnitCreate
from utils.errors import InvalidReference, NotFound

logger = logging.getLogger(__name__)


def create_category(db: Session, data: CategoryCreate) -> Category:
    category = Category(**data.model_dump())
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Category %s created (id=%s)", category.name, category.id)
    return category


def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if category is None:
        raise NotFound(f"Category with ID {category_id} not found")
    return category


def create_unit(db: Session, data: UnitCreate) -> Unit:
    if data.base_unit_id is not None:
        if db.query(Unit.id).filter(Unit.id == data.base_unit_id).first() is None:
            raise InvalidReference(f"Base unit with ID {data.base_unit_id} not found")

    unit = Unit(**data.model_dump())
    db.add(unit)
    db.commit()
    db.refresh(unit)
    logger.info("Unit %s created (id=%s)", unit.abbreviation, unit.id)
    return unit


def list_units(db: Session) -> List[Unit]:
    return db.query(Unit).order_by(Unit.name).all()


def get_unit(db: Session, unit_id: int) -> Unit:
    unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if unit is None:
        raise NotFound(f"Unit with ID {unit_id} not found")
    return unit
