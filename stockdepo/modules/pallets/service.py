# stockdepo/modules/pallets/service.py
import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from .repository import PalletRepository
from .schemas import PalletCreate, PalletResponse, EstadoPallet
from stockdepo.shared.database.models import Pallet

logger = logging.getLogger(__name__)

class PalletService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = PalletRepository(db)
    
    def listar_pallets(self, estado: Optional[EstadoPallet] = None) -> List[PalletResponse]:
        pallets = self.repository.get_all(estado.value if estado else None)
        return [build_pallet_response(p) for p in pallets]
    
    def obtener_pallet(self, pallet_id: int) -> PalletResponse:
        return build_pallet_response(self._get_pallet(pallet_id))
    
    def crear_pallet(self, pallet_data: PalletCreate) -> PalletResponse:
        if not self.repository.get_producto(pallet_data.producto_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Producto no encontrado"
            )
        if self.repository.exists_codigo(pallet_data.codigo):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Ya existe un pallet con este código"
            )
        
        pallet = self.repository.create({
            **pallet_data.model_dump(),
            "estado": EstadoPallet.POR_UBICAR.value
        })
        logger.info(f"Pallet creado: {pallet.codigo} (id={pallet.id})")
        return build_pallet_response(pallet)
    
    def eliminar_pallet(self, pallet_id: int) -> None:
        pallet = self._get_pallet(pallet_id)
        if pallet.posicion_id is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="El pallet está ubicado; libere la posición antes de eliminarlo"
            )
        self.repository.delete(pallet)
        logger.info(f"Pallet eliminado: {pallet.codigo} (id={pallet_id})")
    
    def _get_pallet(self, pallet_id: int) -> Pallet:
        pallet = self.repository.get_by_id(pallet_id)
        if not pallet:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Pallet no encontrado"
            )
        return pallet


def build_pallet_response(pallet: Pallet) -> PalletResponse:
    producto = pallet.producto
    posicion = pallet.posicion
    return PalletResponse(
        id=pallet.id,
        codigo=pallet.codigo,
        descripcion=pallet.descripcion,
        producto_id=pallet.producto_id,
        producto_codigo=producto.codigo if producto else None,
        producto_nombre=producto.nombre if producto else None,
        movimiento_id=pallet.movimiento_id,
        cantidad=pallet.cantidad,
        lote=pallet.lote,
        fecha_fabricacion=pallet.fecha_fabricacion,
        fecha_vencimiento=pallet.fecha_vencimiento,
        estado=pallet.estado,
        posicion_id=pallet.posicion_id,
        posicion=posicion.coordenada if posicion else None,
        deposito_id=posicion.deposito_id if posicion else None,
        created_at=pallet.created_at
    )
