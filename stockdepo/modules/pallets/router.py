# stockdepo/modules/pallets/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from stockdepo.config.database import get_db
from .service import PalletService
from .schemas import PalletCreate, PalletResponse, EstadoPallet

router = APIRouter()

@router.get("", response_model=List[PalletResponse])
async def listar_pallets(
    estado: Optional[EstadoPallet] = Query(None, description="POR_UBICAR, UBICADO o DESPACHADO"),
    db: Session = Depends(get_db)
):
    """Pallets, más recientes primero"""
    service = PalletService(db)
    return service.listar_pallets(estado)

@router.get("/{pallet_id}", response_model=PalletResponse)
async def obtener_pallet(pallet_id: int, db: Session = Depends(get_db)):
    service = PalletService(db)
    return service.obtener_pallet(pallet_id)

@router.post("", response_model=PalletResponse, status_code=status.HTTP_201_CREATED)
async def crear_pallet(pallet_data: PalletCreate, db: Session = Depends(get_db)):
    """Crear pallet en estado POR_UBICAR"""
    service = PalletService(db)
    return service.crear_pallet(pallet_data)

@router.delete("/{pallet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def eliminar_pallet(pallet_id: int, db: Session = Depends(get_db)):
    service = PalletService(db)
    service.eliminar_pallet(pallet_id)
