# stockdepo/modules/movimientos/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from stockdepo.config.database import get_db
from .service import MovimientoService
from .schemas import (
    TipoMovimiento, MovimientoCreate, MovimientoResponse,
    IngresoPalletsCreate, IngresoPalletsResponse
)

router = APIRouter()

@router.get("", response_model=List[MovimientoResponse])
async def listar_movimientos(
    tipo: Optional[TipoMovimiento] = Query(None, description="Filtrar por tipo"),
    producto_id: Optional[int] = Query(None, description="Filtrar por producto"),
    db: Session = Depends(get_db)
):
    """Historial de movimientos, más recientes primero"""
    service = MovimientoService(db)
    return service.listar_movimientos(tipo, producto_id)

@router.get("/{movimiento_id}", response_model=MovimientoResponse)
async def obtener_movimiento(movimiento_id: int, db: Session = Depends(get_db)):
    service = MovimientoService(db)
    return service.obtener_movimiento(movimiento_id)

@router.post("", response_model=MovimientoResponse, status_code=status.HTTP_201_CREATED)
async def registrar_movimiento(data: MovimientoCreate, db: Session = Depends(get_db)):
    """
    Registrar movimiento de stock

    **Efecto sobre el stock del producto:**
    - ENTRADA: suma la cantidad (requiere depósito destino)
    - SALIDA: resta la cantidad (requiere depósito origen)
    - TRASLADO: no cambia el total (requiere origen y destino)

    Si el stock quedara negativo se rechaza y no se guarda nada.
    """
    service = MovimientoService(db)
    return service.registrar_movimiento(data)

@router.post("/ingreso-pallets", response_model=IngresoPalletsResponse, status_code=status.HTTP_201_CREATED)
async def registrar_ingreso_pallets(data: IngresoPalletsCreate, db: Session = Depends(get_db)):
    """
    Ingreso de mercadería con pallets

    Genera una ENTRADA por el total y un pallet POR_UBICAR por cada ítem.
    """
    service = MovimientoService(db)
    return service.registrar_ingreso_pallets(data)

@router.put("/{movimiento_id}", response_model=MovimientoResponse)
async def actualizar_movimiento(
    movimiento_id: int,
    data: MovimientoCreate,
    db: Session = Depends(get_db)
):
    """Reemplaza el movimiento y recalcula el stock del producto"""
    service = MovimientoService(db)
    return service.actualizar_movimiento(movimiento_id, data)

@router.delete("/{movimiento_id}", status_code=status.HTTP_204_NO_CONTENT)
async def eliminar_movimiento(movimiento_id: int, db: Session = Depends(get_db)):
    """Elimina el movimiento revirtiendo su efecto en el stock"""
    service = MovimientoService(db)
    service.eliminar_movimiento(movimiento_id)
