from datetime import datetime

from cafepos import crud, models, schemas


def test_create_and_list_categories(db_session):
    first = crud.create_category(db_session, schemas.CategoryCreate(name="Coffee"))
    second = crud.create_category(db_session, schemas.CategoryCreate(name="Coffee"))
    assert first.id != second.id  # names are not unique

    names = [c.name for c in crud.list_categories(db_session)]
    assert names == ["Coffee", "Coffee"]


def test_product_defaults_to_placeholder_icon(db_session):
    product = crud.create_product(db_session, schemas.ProductCreate(name="Latte", price=45))
    assert product.icon == crud.PLACEHOLDER_ICON
    assert product.has_sweetness is False
    assert product.category_id == 0


def test_list_products_joins_category_name(db_session):
    cat = crud.create_category(db_session, schemas.CategoryCreate(name="Tea"))
    crud.create_product(db_session, schemas.ProductCreate(name="Green Tea", price=40, category_id=cat.id))
    crud.create_product(db_session, schemas.ProductCreate(name="Orphan", price=10, category_id=999))

    rows = {p["name"]: p for p in crud.list_products(db_session)}
    assert rows["Green Tea"]["category_name"] == "Tea"
    assert rows["Orphan"]["category_name"] is None


def test_delete_category_cascades_to_products(db_session):
    keep = crud.create_category(db_session, schemas.CategoryCreate(name="Bakery"))
    drop = crud.create_category(db_session, schemas.CategoryCreate(name="Seasonal"))
    for i in range(3):
        crud.create_product(db_session, schemas.ProductCreate(name=f"Special {i}", category_id=drop.id))
    crud.create_product(db_session, schemas.ProductCreate(name="Croissant", category_id=keep.id))

    removed = crud.delete_category(db_session, drop.id)
    assert removed == 3
    assert [p["name"] for p in crud.list_products(db_session)] == ["Croissant"]
    assert [c.id for c in crud.list_categories(db_session)] == [keep.id]


def test_delete_empty_category(db_session):
    cat = crud.create_category(db_session, schemas.CategoryCreate(name="Empty"))
    assert crud.delete_category(db_session, cat.id) == 0
    assert crud.list_categories(db_session) == []


def test_order_defaults(db_session):
    order = crud.create_order(db_session, schemas.OrderCreate(items=[{"name": "Mocha", "qty": 1}], total=55))
    assert order.status == "pending"
    assert isinstance(order.created_at, datetime)
    assert order.items == [{"name": "Mocha", "qty": 1}]


def test_recent_orders_newest_first_and_capped(db_session):
    for i in range(55):
        crud.create_order(db_session, schemas.OrderCreate(items=[], total=i))
    orders = crud.list_recent_orders(db_session)
    assert len(orders) == crud.RECENT_ORDERS_LIMIT
    ids = [o.id for o in orders]
    assert ids == sorted(ids, reverse=True)
    assert ids[0] == 55


def test_delete_order_and_product(db_session):
    order = crud.create_order(db_session, schemas.OrderCreate(items=[], total=1))
    product = crud.create_product(db_session, schemas.ProductCreate(name="Scone"))
    assert crud.delete_order(db_session, order.id) is True
    assert crud.delete_order(db_session, order.id) is False
    assert crud.delete_product(db_session, product.id) is True
    assert db_session.get(models.Product, product.id) is None


def test_daily_sales_groups_by_day(db_session):
    def order(total, when):
        crud.create_order(db_session, schemas.OrderCreate(items=[], total=total), created_at=when)

    order(90, datetime(2026, 10, 1, 8, 30))
    order(45.5, datetime(2026, 10, 1, 17, 0))
    order(20, datetime(2026, 10, 3, 9, 0))

    sales = crud.daily_sales(db_session)
    assert sales == [
        {"sale_date": "2026-10-03", "total": 20.0},
        {"sale_date": "2026-10-01", "total": 135.5},
    ]  # 2026-10-02 had no orders and is absent


def test_daily_sales_keeps_seven_latest_days(db_session):
    for day in range(1, 11):
        crud.create_order(db_session, schemas.OrderCreate(items=[], total=day), created_at=datetime(2026, 9, day, 12, 0))

    sales = crud.daily_sales(db_session)
    assert len(sales) == 7
    assert sales[0]["sale_date"] == "2026-09-10"
    assert sales[-1]["sale_date"] == "2026-09-04"
    assert sales[0]["total"] == 10
