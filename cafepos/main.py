import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import assets, auth, config, crud, schemas
from .db import SessionLocal, engine, init_schema, seed_admin
from .middleware import cors_and_errors
from .utils import parse_id, to_int, to_number

logging.basicConfig(level=config.state.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = config.get_settings()
    init_schema(engine)
    with SessionLocal() as db:
        seed_admin(db, settings.admin_username, settings.admin_password)
    Path(settings.public_dir).mkdir(parents=True, exist_ok=True)
    logger.info("Cafe POS ready (public dir: %s)", settings.public_dir)
    yield


app = FastAPI(title="Cafe POS", lifespan=lifespan)
app.middleware("http")(cors_and_errors)


# Dependency to get DB session per request

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_settings() -> config.Settings:
    return config.get_settings()


def require_token(request: Request, db: Session = Depends(get_db)):
    if not auth.is_authorized(db, request.headers.get("authorization")):
        raise HTTPException(status_code=401, detail="Unauthorized")


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    # unknown path or unsupported method on a known path
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    logger.warning("Rejected body on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse({"error": "Invalid request body"}, status_code=500)


# -------------------- Public routes --------------------
public = APIRouter()


@public.get("/health")
async def health():
    return {"status": "ok"}


@public.post("/login")
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    token = auth.login(db, payload.username, payload.password)
    if token is None:
        return JSONResponse({"success": False}, status_code=401)
    return {"success": True, "token": str(token)}


@public.get("/categories", response_model=List[schemas.CategoryRead])
def get_categories(db: Session = Depends(get_db)):
    return crud.list_categories(db)


@public.get("/products", response_model=List[schemas.ProductRead])
def get_products(db: Session = Depends(get_db)):
    return crud.list_products(db)


@public.post("/orders")
def create_order(order: schemas.OrderCreate, db: Session = Depends(get_db)):
    created = crud.create_order(db, order)
    return {"success": True, "id": created.id}


# -------------------- Protected routes --------------------
# Bodies are read inside the handlers so the token check always comes first.
protected = APIRouter(dependencies=[Depends(require_token)])


@protected.post("/categories")
async def create_category(request: Request, db: Session = Depends(get_db)):
    payload = await request.json()
    await run_in_threadpool(crud.create_category, db, schemas.CategoryCreate.model_validate(payload))
    return {"success": True}


@protected.delete("/categories/{category_id}")
def delete_category(category_id: str, db: Session = Depends(get_db)):
    cid = parse_id(category_id)
    if cid is not None:
        crud.delete_category(db, cid)
    return {"success": True}


@protected.post("/products")
async def create_product(request: Request, db: Session = Depends(get_db), settings: config.Settings = Depends(get_settings)):
    form = await request.form()
    product = schemas.ProductCreate(
        name=str(form.get("name") or ""),
        price=max(0.0, to_number(form.get("price"))),
        category_id=to_int(form.get("category_id")),
        has_sweetness=form.get("has_sweetness") == "true",
    )
    icon = None
    image = form.get("image")
    if isinstance(image, UploadFile) and image.filename:
        icon = await assets.save_image(image, Path(settings.public_dir))
    await run_in_threadpool(crud.create_product, db, product, icon)
    return {"success": True}


@protected.delete("/products/{product_id}")
def delete_product(product_id: str, db: Session = Depends(get_db)):
    pid = parse_id(product_id)
    if pid is not None:
        crud.delete_product(db, pid)
    return {"success": True}


@protected.get("/orders", response_model=List[schemas.OrderRead])
def get_orders(db: Session = Depends(get_db)):
    return crud.list_recent_orders(db)


@protected.delete("/orders/{order_id}")
def delete_order(order_id: str, db: Session = Depends(get_db)):
    oid = parse_id(order_id)
    if oid is not None:
        crud.delete_order(db, oid)
    return {"success": True}


@protected.get("/daily-sales", response_model=List[schemas.DailySale])
def get_daily_sales(db: Session = Depends(get_db)):
    return crud.daily_sales(db)


app.include_router(public)
app.include_router(protected)


# -------------------- Files & pages --------------------
# Registered last: the catch-all must not shadow any API route.

def _file_or_404(base: str, relative: str):
    path = assets.resolve_file(Path(base), relative)
    if path is None:
        return PlainTextResponse("Not Found", status_code=404)
    return FileResponse(path)


@app.get("/")
@app.get("/login")
def login_page(settings: config.Settings = Depends(get_settings)):
    return _file_or_404(settings.pages_dir, "login.html")


@app.get("/public/{file_path:path}")
def public_file(file_path: str, settings: config.Settings = Depends(get_settings)):
    return _file_or_404(settings.public_dir, file_path)


@app.get("/{file_path:path}")
def page(file_path: str, settings: config.Settings = Depends(get_settings)):
    return _file_or_404(settings.pages_dir, file_path)
