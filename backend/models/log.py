# backend/models/log.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from database import Base

# Audit trail of back-office actions (who changed which record, and how it went)
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)

    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    action = Column(String(50), index=True)       # e.g. SALE_CREATE, STOCK_OPNAME
    resource = Column(String(50), index=True)     # products / purchases / sales / stock
    resource_id = Column(String(64), nullable=True)
    status = Column(String(20), index=True)       # SUCCESS / FAIL
    ip = Column(String(64), nullable=True)

    # Free-form request context (counts, quantities, document ids)
    meta = Column(JSON, nullable=True)

    user = relationship("User", uselist=False)
