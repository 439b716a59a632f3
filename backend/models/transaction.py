"""
Transaction Model - one sold/unsold product listing from the seed feed

Seed Field Mapping (product_transaction.json):
  Seed key          → DB column        Notes
  ──────────────────────────────────────────────────────────
  title             → title            Required
  description       → description
  price             → price            Required
  category          → category
  image             → image            Product image URL
  dateOfSale        → date_of_sale     Required, reduced to a DATE as written
  sold / isSold     → is_sold          Defaults to False
  id                → (dropped)        Store assigns its own primary key
"""
from sqlalchemy import Boolean, Column, Date, Float, Integer, String, Text

from models.database import Base


class Transaction(Base):
    __tablename__ = 'transactions'

    id = Column(Integer, primary_key=True)

    title = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Float, nullable=False)
    category = Column(String(100), index=True)
    image = Column(Text)
    date_of_sale = Column(Date, index=True, nullable=False)
    is_sold = Column(Boolean, default=False, nullable=False)

    def to_dict(self):
        """Convert to dictionary for JSON serialization (camelCase wire keys)."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'price': self.price,
            'category': self.category,
            'image': self.image,
            'dateOfSale': self.date_of_sale.isoformat() if self.date_of_sale else None,
            'isSold': bool(self.is_sold),
        }

    def __repr__(self):
        return f"<Transaction {self.id} {self.title!r} {self.date_of_sale}>"
