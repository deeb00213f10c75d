"""
Módulo Pallets - Unidades físicas de un lote de producto
"""

from .router import router as pallets_router
from .service import PalletService
from .repository import PalletRepository
from .schemas import EstadoPallet

__all__ = [
    "pallets_router",
    "PalletService",
    "PalletRepository",
    "EstadoPallet"
]
