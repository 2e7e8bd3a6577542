from typing import List

from pydantic import BaseModel


class LowStockItem(BaseModel):
    id: int
    name: str
    stock_quantity: int
    low_stock_threshold: int


class StatsSummary(BaseModel):
    products: int
    orders: int
    admins: int
    revenue: float
    average_order_value: float
    low_stock: List[LowStockItem]


class DailyRevenue(BaseModel):
    date: str
    revenue: float
    orders: int


class DailyRevenueResponse(BaseModel):
    data: List[DailyRevenue]
