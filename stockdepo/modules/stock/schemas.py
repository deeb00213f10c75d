# stockdepo/modules/stock/schemas.py
from pydantic import BaseModel
from typing import List, Optional

class StockDeposito(BaseModel):
    """Stock de un producto en un depósito, reconstruido desde los movimientos"""
    deposito_id: int
    deposito_nombre: str
    cantidad: int
    posiciones: List[str]

class ProductoStock(BaseModel):
    id: int
    codigo: str
    nombre: str
    descripcion: Optional[str] = None
    stock: int
    unidad_medida: str
    depositos: List[StockDeposito]

class DashboardStats(BaseModel):
    total_productos: int
    total_stock: int
    total_entradas: int
    total_salidas: int
