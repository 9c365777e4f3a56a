import logging
from datetime import datetime
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from . import models, schemas
from . import db as store

logger = logging.getLogger(__name__)

PLACEHOLDER_ICON = "☕"
RECENT_ORDERS_LIMIT = 50
SALES_DAYS_LIMIT = 7


# -------------------- Categories --------------------

def list_categories(db: Session) -> List[models.Category]:
    return db.query(models.Category).order_by(models.Category.id).all()


def create_category(db: Session, category: schemas.CategoryCreate) -> models.Category:
    db_category = models.Category(name=category.name)
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


def delete_category(db: Session, category_id: int) -> int:
    """Delete a category and every product filed under it. Returns the number of products removed."""
    removed = store.execute(db, "DELETE FROM products WHERE category_id = :id", {"id": category_id})
    store.execute(db, "DELETE FROM categories WHERE id = :id", {"id": category_id})
    db.commit()
    if removed:
        logger.info("Category %s deleted along with %s product(s)", category_id, removed)
    return removed


# -------------------- Products --------------------

def list_products(db: Session) -> List[Dict[str, Any]]:
    return store.query_all(
        db,
        "SELECT p.id, p.name, p.price, p.category_id, p.icon, p.has_sweetness, c.name AS category_name "
        "FROM products p LEFT JOIN categories c ON p.category_id = c.id "
        "ORDER BY p.id",
    )


def create_product(db: Session, product: schemas.ProductCreate, icon: Optional[str] = None) -> models.Product:
    db_product = models.Product(
        name=product.name,
        price=product.price,
        category_id=product.category_id,
        icon=icon or PLACEHOLDER_ICON,
        has_sweetness=product.has_sweetness,
    )
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product


def delete_product(db: Session, product_id: int) -> bool:
    deleted = db.query(models.Product).filter(models.Product.id == product_id).delete()
    db.commit()
    return bool(deleted)


# -------------------- Orders --------------------

def create_order(db: Session, order: schemas.OrderCreate, created_at: Optional[datetime] = None) -> models.Order:
    db_order = models.Order(items=order.items, total=order.total, status="pending")
    if created_at is not None:
        db_order.created_at = created_at
    db.add(db_order)
    db.commit()
    db.refresh(db_order)
    return db_order


def list_recent_orders(db: Session, limit: int = RECENT_ORDERS_LIMIT) -> List[models.Order]:
    return db.query(models.Order).order_by(models.Order.id.desc()).limit(limit).all()


def delete_order(db: Session, order_id: int) -> bool:
    deleted = db.query(models.Order).filter(models.Order.id == order_id).delete()
    db.commit()
    return bool(deleted)


# -------------------- Sales --------------------

def daily_sales(db: Session, days: int = SALES_DAYS_LIMIT) -> List[Dict[str, Any]]:
    """Per-day order totals for the most recent days that have orders, newest first."""
    return store.query_all(
        db,
        "SELECT date(created_at) AS sale_date, SUM(total) AS total FROM orders "
        "GROUP BY sale_date ORDER BY sale_date DESC LIMIT :days",
        {"days": days},
    )
