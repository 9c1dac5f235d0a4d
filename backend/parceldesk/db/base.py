from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .session import Base


class Recipient(Base):
    """Delivery destination"""

    __tablename__ = "recipients"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    phone: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    memo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    lng: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Deleting a recipient deletes its deliveries
    deliveries: Mapped[List["Delivery"]] = relationship(
        back_populates="recipient", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Recipient(id={self.id}, phone='{self.phone}')>"


class Delivery(Base):
    """Shipment record; status follows PICKED_UP -> DELIVERED -> SETTLED"""

    __tablename__ = "deliveries"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    recipient_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("recipients.id"), nullable=False, index=True
    )
    pickup_place: Mapped[str] = mapped_column(String(255), nullable=False)
    box_count: Mapped[int] = mapped_column(Integer, nullable=False)
    settlement: Mapped[str] = mapped_column(String(20), nullable=False)
    fee: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PICKED_UP", server_default="PICKED_UP"
    )
    # Naive wall-clock time in APP_TZ; written by the repository on every store
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    recipient: Mapped[Recipient] = relationship(back_populates="deliveries")

    def __repr__(self):
        return f"<Delivery(id={self.id}, status='{self.status}')>"


class Contact(Base):
    """Address book entry for a frequent sender"""

    __tablename__ = "contacts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    # Natural dedup key for find-or-create; uniqueness is not enforced here
    business_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self):
        return f"<Contact(id={self.id}, business_name='{self.business_name}')>"
