import datetime
import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..config.settings import get_settings
from ..data.catalog_loader import catalog_frame
from ..engine.models import ProductNotFoundError
from .state import cart, cart_lock, engine


logger = logging.getLogger(__name__)

app = FastAPI(
    title="Treat Pricing API",
    description="Prices bakery carts with bulk and sale rules",
    version="1.0.0"
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class QuoteRequest(BaseModel):
    items: Dict[str, int]
    date: Optional[datetime.date] = None


class CartItem(BaseModel):
    name: str
    quantity: int = Field(ge=0)


def _today() -> datetime.date:
    return datetime.date.today()


@app.get("/")
async def root():
    return {"status": "online", "message": "Treat Pricing API Active"}


@app.get("/catalog")
async def get_catalog(search: Optional[str] = None):
    df = catalog_frame(engine.items)
    if search:
        mask = (
            df.index.str.contains(search, case=False, na=False) |
            df['Sale'].fillna('').str.contains(search, case=False)
        )
        df = df[mask]

    df = df.astype(object).where(df.notna(), None)
    return df.to_dict(orient="index")


@app.post("/quote")
async def quote(req: QuoteRequest):
    on = req.date or _today()
    try:
        result = engine.calculate(req.items, on)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return jsonable_encoder(result)


# Cart handlers run in the threadpool; cart_lock serializes cart access.

@app.get("/cart")
def get_cart():
    with cart_lock:
        return {"items": cart.items()}


@app.put("/cart/items")
def add_cart_item(item: CartItem):
    # Cart entries must name catalog products
    try:
        engine.find_item(item.name)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    with cart_lock:
        cart.add(item.name, item.quantity)
        return {"items": cart.items()}


@app.delete("/cart")
def clear_cart():
    with cart_lock:
        cart.clear()
        return {"items": cart.items()}


@app.get("/cart/total")
def get_cart_total(on: Optional[datetime.date] = Query(None, alias="date")):
    on = on or _today()
    try:
        with cart_lock:
            amount = cart.total(engine.items, on)
    except ProductNotFoundError as e:
        logger.error("Cart references unknown product: %s", e.name)
        raise HTTPException(status_code=404, detail=str(e))
    return {"date": on.isoformat(), "total": amount}


@app.get("/system/status")
async def get_status():
    settings = get_settings()
    return {
        "engine_active": True,
        "catalog_path": str(settings.catalog_path),
        "catalog_items": len(engine.items),
        "cart_persistent": settings.cart_store_path is not None,
    }
