"""
Módulo Stock - Stock por depósito y tablero
"""

from .router import router as stock_router
from .service import StockService
from .agregador import agregar_stock_por_deposito

__all__ = [
    "stock_router",
    "StockService",
    "agregar_stock_por_deposito"
]
