# stockdepo/modules/depositos/router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from stockdepo.config.database import get_db
from .service import DepositoService
from .schemas import DepositoCreate, DepositoUpdate, DepositoResponse

router = APIRouter()

@router.get("", response_model=List[DepositoResponse])
async def listar_depositos(db: Session = Depends(get_db)):
    """Listado de depósitos ordenado por nombre"""
    service = DepositoService(db)
    return service.listar_depositos()

@router.get("/{deposito_id}", response_model=DepositoResponse)
async def obtener_deposito(deposito_id: int, db: Session = Depends(get_db)):
    service = DepositoService(db)
    return service.obtener_deposito(deposito_id)

@router.post("", response_model=DepositoResponse, status_code=status.HTTP_201_CREATED)
async def crear_deposito(deposito_data: DepositoCreate, db: Session = Depends(get_db)):
    """
    Crear depósito

    **Validaciones:**
    - El nombre debe ser único
    """
    service = DepositoService(db)
    return service.crear_deposito(deposito_data)

@router.put("/{deposito_id}", response_model=DepositoResponse)
async def actualizar_deposito(
    deposito_id: int,
    deposito_data: DepositoUpdate,
    db: Session = Depends(get_db)
):
    service = DepositoService(db)
    return service.actualizar_deposito(deposito_id, deposito_data)

@router.delete("/{deposito_id}", status_code=status.HTTP_204_NO_CONTENT)
async def eliminar_deposito(deposito_id: int, db: Session = Depends(get_db)):
    """
    Eliminar depósito con todas sus posiciones

    No se permite si hay movimientos que lo referencian o pallets ubicados.
    """
    service = DepositoService(db)
    service.eliminar_deposito(deposito_id)
