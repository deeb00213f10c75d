"""
Módulo Productos - Catálogo

- router.py: Endpoints FastAPI
- service.py: Reglas de negocio (código único)
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as productos_router
from .service import ProductoService
from .repository import ProductoRepository

__all__ = [
    "productos_router",
    "ProductoService",
    "ProductoRepository"
]
