from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from stockdepo.config.settings import settings
import time
import logging

logger = logging.getLogger(__name__)

# Rutas que el balanceador consulta constantemente
RUTAS_SIN_LOG = {"/health", "/api/v1/health"}

def setup_middleware(app: FastAPI):
    """Registra CORS para el front-end y el log de cada request"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=3600
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        if request.url.path in RUTAS_SIN_LOG:
            return await call_next(request)

        inicio = time.perf_counter()
        response = await call_next(request)
        duracion = time.perf_counter() - inicio

        nivel = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            nivel,
            f"{request.method} {request.url.path} -> {response.status_code} ({duracion:.4f}s)"
        )
        response.headers["X-Process-Time"] = f"{duracion:.4f}"
        return response
