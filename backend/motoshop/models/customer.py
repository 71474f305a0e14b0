"""
Customer model - the party that owes receivables
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from motoshop.db.base import Base


class Customer(Base):
    """Customer of the shop (service and retail)"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True, comment="Full name")
    phone = Column(String(20), index=True, comment="Phone number")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    sales_orders = relationship("SalesOrder", back_populates="customer")
    receivables = relationship("CustomerReceivable", back_populates="customer")

    def __repr__(self):
        return f"<Customer {self.id}: {self.name}>"
