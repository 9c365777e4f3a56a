from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String

from .db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False)
    # stored and compared as plain text
    password = Column(String, nullable=False)
    # current session token; overwritten on each login
    token = Column(String, nullable=True, index=True)


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, default="")
    price = Column(Float, nullable=False, default=0)
    # no foreign key: products may point at a deleted or never-created category
    category_id = Column(Integer, nullable=True, index=True)
    icon = Column(String, nullable=False)
    has_sweetness = Column(Boolean, nullable=False, default=False)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    # line items as the client sent them; stored as JSON text
    items = Column(JSON, nullable=False, default=list)
    total = Column(Float, nullable=False, default=0)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=datetime.now)
