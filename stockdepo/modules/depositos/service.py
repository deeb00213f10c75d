# stockdepo/modules/depositos/service.py
import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from .repository import DepositoRepository
from .schemas import DepositoCreate, DepositoUpdate
from stockdepo.shared.database.models import Deposito

logger = logging.getLogger(__name__)

class DepositoService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = DepositoRepository(db)
    
    def listar_depositos(self) -> List[Deposito]:
        return self.repository.get_all()
    
    def obtener_deposito(self, deposito_id: int) -> Deposito:
        deposito = self.repository.get_by_id(deposito_id)
        if not deposito:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Depósito no encontrado"
            )
        return deposito
    
    def _validar_nombre_unico(self, nombre: str, exclude_id: Optional[int] = None):
        # La constraint única de la tabla cubre las altas concurrentes
        if self.repository.exists_nombre(nombre, exclude_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Ya existe un depósito con este nombre"
            )
    
    def crear_deposito(self, deposito_data: DepositoCreate) -> Deposito:
        self._validar_nombre_unico(deposito_data.nombre)
        deposito = self.repository.create(deposito_data.model_dump())
        logger.info(f"Depósito creado: {deposito.nombre} (id={deposito.id})")
        return deposito
    
    def actualizar_deposito(self, deposito_id: int, deposito_data: DepositoUpdate) -> Deposito:
        deposito = self.obtener_deposito(deposito_id)
        update_data = deposito_data.model_dump(exclude_unset=True)
        
        if "nombre" in update_data:
            self._validar_nombre_unico(update_data["nombre"], exclude_id=deposito_id)
        
        return self.repository.update(deposito, update_data)
    
    def eliminar_deposito(self, deposito_id: int) -> None:
        """Elimina el depósito y sus posiciones"""
        deposito = self.obtener_deposito(deposito_id)
        
        if self.repository.has_movements(deposito_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="El depósito tiene movimientos registrados"
            )
        
        if self.repository.has_placed_pallets(deposito_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="El depósito tiene pallets ubicados en sus posiciones"
            )
        
        self.repository.delete(deposito)
        logger.info(f"Depósito eliminado: {deposito.nombre} (id={deposito_id})")
