# backend/routes/stats.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import datetime, timedelta

from database import get_db
from utils.tokenJWT import admin_required
from models.users import User
from models.order import Order
from models.product import Product
from schemas.stats import DailyRevenue, DailyRevenueResponse, LowStockItem, StatsSummary

router = APIRouter(
    prefix="/stats",
    tags=["Stats"]
)

# Used when a product has no threshold of its own
LOW_STOCK_THRESHOLD = 10


# === Endpoint 1: Dashboard Summary ===

@router.get("/summary", response_model=StatsSummary)
def get_stats_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required)
):
    products = db.query(Product).all()
    order_count = db.query(Order).count()
    revenue = db.query(func.sum(Order.total_amount)).scalar() or 0.0
    admins = db.query(User).count()

    low_stock = []
    for p in products:
        qty = p.stock_quantity or 0
        threshold = p.low_stock_threshold if p.low_stock_threshold is not None else LOW_STOCK_THRESHOLD
        if qty <= threshold:
            low_stock.append(LowStockItem(id=p.id, name=p.name, stock_quantity=qty, low_stock_threshold=threshold))

    return StatsSummary(
        products=len(products),
        orders=order_count,
        admins=admins or 1,
        revenue=revenue,
        average_order_value=revenue / order_count if order_count else 0.0,
        low_stock=low_stock,
    )


# === Endpoint 2: Chart Data ===

@router.get("/daily-revenue", response_model=DailyRevenueResponse)
def get_daily_revenue_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required)
):
    today = datetime.now().date()
    seven_days_ago = today - timedelta(days=6)

    orders = db.query(Order).filter(
        Order.created_at >= datetime.combine(seven_days_ago, datetime.min.time())
    ).all()

    buckets = {}
    for order in orders:
        if order.created_at is None:
            continue
        key = order.created_at.date()
        revenue, count = buckets.get(key, (0.0, 0))
        buckets[key] = (revenue + (order.total_amount or 0.0), count + 1)

    # Fill missing dates with zero revenue
    result_data = []
    for i in range(7):
        current_date = seven_days_ago + timedelta(days=i)
        revenue, count = buckets.get(current_date, (0.0, 0))
        result_data.append(DailyRevenue(date=current_date.strftime("%b %d"), revenue=revenue, orders=count))

    return DailyRevenueResponse(data=result_data)
