# stockdepo/api/v1/router.py
from fastapi import APIRouter

from stockdepo.config.settings import settings
from stockdepo.modules.productos import productos_router
from stockdepo.modules.depositos import depositos_router
from stockdepo.modules.movimientos import movimientos_router
from stockdepo.modules.posiciones import posiciones_router
from stockdepo.modules.pallets import pallets_router
from stockdepo.modules.stock import stock_router

# Crear router principal de la API v1
api_router = APIRouter(prefix="/api/v1")

# ==================== MÓDULOS ====================

api_router.include_router(productos_router, prefix="/productos", tags=["Productos"])
api_router.include_router(depositos_router, prefix="/depositos", tags=["Depósitos"])
api_router.include_router(movimientos_router, prefix="/movimientos", tags=["Movimientos"])
api_router.include_router(posiciones_router, prefix="/posiciones", tags=["Posiciones"])
api_router.include_router(pallets_router, prefix="/pallets", tags=["Pallets"])
api_router.include_router(stock_router, prefix="/stock", tags=["Stock"])

# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": "StockDepo API v1",
        "version": settings.version,
        "status": "active",
        "available_endpoints": {
            "productos": "/api/v1/productos",
            "depositos": "/api/v1/depositos",
            "movimientos": "/api/v1/movimientos",
            "posiciones": "/api/v1/posiciones",
            "pallets": "/api/v1/pallets",
            "stock": "/api/v1/stock"
        }
    }

@api_router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version
    }
