# stockdepo/modules/stock/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from stockdepo.config.database import get_db
from .service import StockService
from .schemas import ProductoStock, DashboardStats

router = APIRouter()

@router.get("", response_model=List[ProductoStock])
async def stock_por_producto(
    busqueda: Optional[str] = Query(None, description="Buscar productos por nombre"),
    db: Session = Depends(get_db)
):
    """
    Stock por depósito

    Se calcula recorriendo el historial de movimientos de cada producto:
    ENTRADA suma al destino, SALIDA resta del origen, TRASLADO hace ambas.
    """
    service = StockService(db)
    return service.stock_por_producto(busqueda)

@router.get("/dashboard", response_model=DashboardStats)
async def estadisticas_dashboard(db: Session = Depends(get_db)):
    """Totales del tablero: productos, stock, entradas y salidas"""
    service = StockService(db)
    return service.estadisticas_dashboard()
