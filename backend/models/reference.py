# backend/models/reference.py
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


# Product grouping referenced by Product.kategori_id
class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


# Unit of measure; derived units point at their base unit
class Unit(Base):
    __tablename__ = "units"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    abbreviation = Column(String, nullable=False)
    conversion_factor = Column(
        Numeric(10, 4), CheckConstraint("conversion_factor > 0"), nullable=False
    )
    base_unit_id = Column(Integer, ForeignKey("units.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    base_unit = relationship("Unit", remote_side=[id])
