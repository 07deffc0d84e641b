from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Text, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime
from pizzeria.models.base import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    order_type = Column(String(20), nullable=False)  # delivery | takeaway
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="pending")
    special_instructions = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    customer = relationship("Customer", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id")

    @property
    def customer_name(self):
        return self.customer.name

    @property
    def customer_phone(self):
        return self.customer.phone

    @property
    def customer_address(self):
        return self.customer.address

    @property
    def order_items(self):
        return self.items


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, nullable=False)
    size = Column(String(50), nullable=True)

    # Snapshot pricing and name at time of order
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
    toppings = relationship("OrderItemTopping", back_populates="order_item", cascade="all, delete-orphan", order_by="OrderItemTopping.id")


class OrderItemTopping(Base):
    __tablename__ = "order_item_toppings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_item_id = Column(Integer, ForeignKey("order_items.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)

    order_item = relationship("OrderItem", back_populates="toppings")
