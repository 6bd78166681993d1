from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKeyConstraint, Index, Numeric, PrimaryKeyConstraint, SmallInteger, String, UniqueConstraint, Uuid, false, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
import datetime
import decimal
import uuid

class Base(DeclarativeBase):
    pass


class Users(Base):
    __tablename__ = 'users'
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        PrimaryKeyConstraint('id', name='users_pkey'),
        UniqueConstraint('email', name='users_email_key')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now())

    flats: Mapped[list['Flats']] = relationship(
        'Flats',
        back_populates='user',
        cascade='all, delete-orphan',
        passive_deletes=True
    )


class Flats(Base):
    __tablename__ = 'flats'
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='flats_user_id_fkey'),
        PrimaryKeyConstraint('id', name='flats_pkey'),
        Index('idx_flats_user_id', 'user_id')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    name: Mapped[str] = mapped_column(String(100))
    address: Mapped[str] = mapped_column(String(200))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now(), onupdate=func.now())

    user: Mapped['Users'] = relationship('Users', back_populates='flats')
    payment_types: Mapped[list['PaymentTypes']] = relationship(
        'PaymentTypes',
        back_populates='flat',
        cascade='all, delete-orphan',
        passive_deletes=True
    )


class PaymentTypes(Base):
    __tablename__ = 'payment_types'
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        CheckConstraint('base_amount >= 0 AND base_amount < 1000000', name='payment_types_base_amount_check'),
        ForeignKeyConstraint(['flat_id'], ['flats.id'], ondelete='CASCADE', name='payment_types_flat_id_fkey'),
        PrimaryKeyConstraint('id', name='payment_types_pkey'),
        Index('idx_payment_types_flat_id', 'flat_id')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    flat_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    name: Mapped[str] = mapped_column(String(100))
    base_amount: Mapped[decimal.Decimal] = mapped_column(Numeric(10, 2))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now(), onupdate=func.now())

    flat: Mapped['Flats'] = relationship('Flats', back_populates='payment_types')
    payments: Mapped[list['Payments']] = relationship(
        'Payments',
        back_populates='payment_type',
        cascade='all, delete-orphan',
        passive_deletes=True
    )


class Payments(Base):
    __tablename__ = 'payments'
    __mapper_args__ = {"eager_defaults": True}
    __table_args__ = (
        CheckConstraint('month >= 1 AND month <= 12', name='payments_month_check'),
        CheckConstraint('year >= 1900 AND year <= 2100', name='payments_year_check'),
        ForeignKeyConstraint(['payment_type_id'], ['payment_types.id'], ondelete='CASCADE', name='payments_payment_type_id_fkey'),
        PrimaryKeyConstraint('id', name='payments_pkey'),
        UniqueConstraint('payment_type_id', 'month', 'year', name='payments_payment_type_id_month_year_key'),
        Index('idx_payments_is_paid', 'is_paid')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    payment_type_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    amount: Mapped[decimal.Decimal] = mapped_column(Numeric(10, 2))
    month: Mapped[int] = mapped_column(SmallInteger)
    year: Mapped[int] = mapped_column(SmallInteger)
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    paid_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(True))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now(), onupdate=func.now())

    payment_type: Mapped['PaymentTypes'] = relationship('PaymentTypes', back_populates='payments')
