"""
Módulo Posiciones - Posiciones de rack por depósito

- rango.py: Expansión rack × columna × nivel × profundidad
- visualizacion.py: Escena 3D (geometría y colores por estado)
- router.py / service.py / repository.py / schemas.py
"""

from .router import router as posiciones_router
from .service import PosicionService
from .repository import PosicionRepository
from .schemas import EstadoPosicion

__all__ = [
    "posiciones_router",
    "PosicionService",
    "PosicionRepository",
    "EstadoPosicion"
]
