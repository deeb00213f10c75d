"""
Módulo Depósitos - Alta, edición y baja de depósitos
"""

from .router import router as depositos_router
from .service import DepositoService
from .repository import DepositoRepository

__all__ = [
    "depositos_router",
    "DepositoService",
    "DepositoRepository"
]
