from sqlalchemy import Column, String, Integer, Float, Boolean, ForeignKey, Text, DateTime, Table
from sqlalchemy.orm import relationship
from datetime import datetime
from pizzeria.models.base import Base


menu_item_sizes = Table(
    "menu_item_sizes",
    Base.metadata,
    Column("menu_item_id", Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), primary_key=True),
    Column("size_id", Integer, ForeignKey("sizes.id", ondelete="CASCADE"), primary_key=True),
)

menu_item_toppings = Table(
    "menu_item_toppings",
    Base.metadata,
    Column("menu_item_id", Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), primary_key=True),
    Column("topping_id", Integer, ForeignKey("toppings.id", ondelete="CASCADE"), primary_key=True),
)


class Size(Base):
    __tablename__ = "sizes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)


class Topping(Base):
    __tablename__ = "toppings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)

    image = Column(String(255), nullable=True)  # /uploads/<filename> or external URL
    popular = Column(Boolean, default=False, nullable=False)
    discount = Column(Integer, nullable=True)  # percent

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    category = relationship("Category", back_populates="menu_items")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    sizes = relationship("Size", secondary=menu_item_sizes, order_by="Size.id")
    toppings = relationship("Topping", secondary=menu_item_toppings, order_by="Topping.name")
    offers = relationship("Offer", secondary="offer_menu_items", back_populates="menu_items")

    @property
    def available_sizes(self):
        return [s.name for s in self.sizes]

    @property
    def available_toppings(self):
        return [t.name for t in self.toppings]
