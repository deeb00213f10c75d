# stockdepo/modules/posiciones/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from stockdepo.config.database import get_db
from .service import PosicionService
from .schemas import (
    EstadoPosicion, RangoPosicionesCreate, PosicionUpdate, AsignarPalletRequest,
    AlternarPosicionRequest, PosicionResponse, RangoPosicionesResponse,
    ResumenRacksResponse, EscenaResponse
)

router = APIRouter()

# ==================== CONSULTAS ====================

@router.get("", response_model=List[PosicionResponse])
async def listar_posiciones(
    deposito_id: int = Query(..., description="Depósito a consultar"),
    rack: Optional[str] = Query(None, description="Filtrar por rack"),
    columna: Optional[str] = Query(None, description="Filtrar por columna"),
    nivel: Optional[int] = Query(None, ge=1, description="Filtrar por nivel"),
    estado: Optional[EstadoPosicion] = Query(None, description="Filtrar por estado"),
    db: Session = Depends(get_db)
):
    """Posiciones del depósito ordenadas por rack, columna, nivel y profundidad"""
    service = PosicionService(db)
    return service.listar_posiciones(deposito_id, rack, columna, nivel, estado)

@router.get("/racks", response_model=ResumenRacksResponse)
async def resumen_racks(
    deposito_id: int = Query(..., description="Depósito a consultar"),
    db: Session = Depends(get_db)
):
    """Racks del depósito y columnas de cada rack (filtros en cascada)"""
    service = PosicionService(db)
    return service.resumen_racks(deposito_id)

@router.get("/visualizacion", response_model=EscenaResponse)
async def visualizacion_racks(
    deposito_id: Optional[int] = Query(None, description="Depósito (todos si se omite)"),
    rack: Optional[str] = Query(None),
    columna: Optional[str] = Query(None),
    nivel: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db)
):
    """
    Escena 3D de los racks

    Devuelve una caja por posición con su color según estado
    (OCUPADO rojo, DISPONIBLE verde, otro gris) y la estructura de cada rack.
    """
    service = PosicionService(db)
    return service.construir_escena(deposito_id, rack, columna, nivel)

@router.get("/{posicion_id}", response_model=PosicionResponse)
async def obtener_posicion(posicion_id: int, db: Session = Depends(get_db)):
    service = PosicionService(db)
    return service.obtener_posicion(posicion_id)

# ==================== ALTA ====================

@router.post("/rango", response_model=RangoPosicionesResponse, status_code=status.HTTP_201_CREATED)
async def crear_rango(data: RangoPosicionesCreate, db: Session = Depends(get_db)):
    """
    Crear posiciones por rango

    **Ejemplo:** racks A-B, columnas A-C, niveles 1-2, profundidades 1-1
    genera 2 × 3 × 2 × 1 = 12 posiciones.

    **Validaciones:**
    - Rangos invertidos (desde > hasta) se rechazan
    - Si alguna coordenada ya existe en el depósito no se crea ninguna
    """
    service = PosicionService(db)
    return service.crear_rango(data)

@router.post("/ejemplo", response_model=List[PosicionResponse], status_code=status.HTTP_201_CREATED)
async def crear_posiciones_ejemplo(
    deposito_id: int = Query(..., description="Depósito donde crear las posiciones de ejemplo"),
    db: Session = Depends(get_db)
):
    """Crea tres posiciones ocupadas de demostración (AA31, AC22, AE13)"""
    service = PosicionService(db)
    return service.crear_posiciones_ejemplo(deposito_id)

# ==================== EDICIÓN ====================

@router.put("/{posicion_id}", response_model=PosicionResponse)
async def actualizar_posicion(
    posicion_id: int,
    data: PosicionUpdate,
    db: Session = Depends(get_db)
):
    service = PosicionService(db)
    return service.actualizar_posicion(posicion_id, data)

@router.delete("/{posicion_id}", status_code=status.HTTP_204_NO_CONTENT)
async def eliminar_posicion(posicion_id: int, db: Session = Depends(get_db)):
    service = PosicionService(db)
    service.eliminar_posicion(posicion_id)

# ==================== OCUPACIÓN ====================

@router.post("/{posicion_id}/asignar-pallet", response_model=PosicionResponse)
async def asignar_pallet(
    posicion_id: int,
    data: AsignarPalletRequest,
    db: Session = Depends(get_db)
):
    """Ubicar un pallet en una posición disponible"""
    service = PosicionService(db)
    return service.asignar_pallet(posicion_id, data.pallet_id)

@router.post("/{posicion_id}/liberar", response_model=PosicionResponse)
async def liberar_posicion(posicion_id: int, db: Session = Depends(get_db)):
    """Dejar la posición DISPONIBLE; el pallet vuelve a POR_UBICAR"""
    service = PosicionService(db)
    return service.liberar_posicion(posicion_id)

@router.post("/{posicion_id}/alternar", response_model=PosicionResponse)
async def alternar_posicion(
    posicion_id: int,
    data: AlternarPosicionRequest,
    db: Session = Depends(get_db)
):
    """Asigna si está disponible (requiere pallet_id), libera en otro caso"""
    service = PosicionService(db)
    return service.alternar_posicion(posicion_id, data.pallet_id)
