"""
Módulo Movimientos - Entradas, salidas y traslados de stock

Cada movimiento ajusta el stock del producto en la misma transacción en que
se guarda. El ingreso con pallets crea además los pallets del lote.
"""

from .router import router as movimientos_router
from .service import MovimientoService, delta_stock
from .repository import MovimientoRepository
from .schemas import TipoMovimiento

__all__ = [
    "movimientos_router",
    "MovimientoService",
    "MovimientoRepository",
    "TipoMovimiento",
    "delta_stock"
]
