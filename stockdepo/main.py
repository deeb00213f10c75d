import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import IntegrityError

from stockdepo.config.settings import settings
from stockdepo.config.database import Base, engine
from stockdepo.core.middleware import setup_middleware
from stockdepo.api.v1.router import api_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("StockDepo API starting...")
    logger.info(f"Version: {settings.version}")
    logger.info(f"Environment: {'Development' if settings.debug else 'Production'}")
    Base.metadata.create_all(bind=engine)
    
    yield
    
    # Shutdown
    logger.info("StockDepo API shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Gestión de depósitos: productos, movimientos de stock, posiciones y pallets",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)

# Include routers
app.include_router(api_router)

@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Violaciones de unicidad o de referencias que pasaron las validaciones previas"""
    logger.warning(f"IntegrityError en {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "El registro entra en conflicto con datos existentes"}
    )

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "StockDepo API - Gestión de depósitos",
        "version": settings.version,
        "status": "running",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "api": "/api/v1"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "stockdepo.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
