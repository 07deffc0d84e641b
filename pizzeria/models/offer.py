from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Text, Date, DateTime, Table
from sqlalchemy.orm import relationship
from datetime import datetime
from pizzeria.models.base import Base


offer_menu_items = Table(
    "offer_menu_items",
    Base.metadata,
    Column("offer_id", Integer, ForeignKey("offers.id", ondelete="CASCADE"), primary_key=True),
    Column("menu_item_id", Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), primary_key=True),
)


class Offer(Base):
    __tablename__ = "offers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(255), nullable=True)
    discount = Column(Integer, default=0, nullable=False)  # 0 = non-percentage deal
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Empty = applies to the whole menu
    menu_items = relationship("MenuItem", secondary=offer_menu_items, back_populates="offers", order_by="MenuItem.id")

    @property
    def menu_item_ids(self):
        return [m.id for m in self.menu_items]
