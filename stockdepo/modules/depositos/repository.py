# stockdepo/modules/depositos/repository.py
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from stockdepo.shared.database.models import Deposito, Movimiento, Posicion, Pallet

class DepositoRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self) -> List[Deposito]:
        return self.db.query(Deposito).order_by(Deposito.nombre).all()
    
    def get_by_id(self, deposito_id: int) -> Optional[Deposito]:
        return self.db.query(Deposito).filter(Deposito.id == deposito_id).first()
    
    def exists_nombre(self, nombre: str, exclude_id: Optional[int] = None) -> bool:
        """Verificar si ya existe otro depósito con el mismo nombre"""
        query = self.db.query(Deposito.id).filter(Deposito.nombre == nombre)
        if exclude_id is not None:
            query = query.filter(Deposito.id != exclude_id)
        return query.first() is not None
    
    def has_movements(self, deposito_id: int) -> bool:
        return self.db.query(Movimiento.id).filter(
            or_(
                Movimiento.deposito_origen_id == deposito_id,
                Movimiento.deposito_destino_id == deposito_id
            )
        ).first() is not None
    
    def has_placed_pallets(self, deposito_id: int) -> bool:
        return self.db.query(Pallet.id)\
            .join(Posicion, Pallet.posicion_id == Posicion.id)\
            .filter(Posicion.deposito_id == deposito_id)\
            .first() is not None
    
    def create(self, deposito_data: dict) -> Deposito:
        try:
            deposito = Deposito(**deposito_data)
            self.db.add(deposito)
            self.db.commit()
            self.db.refresh(deposito)
            return deposito
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def update(self, deposito: Deposito, update_data: dict) -> Deposito:
        try:
            for key, value in update_data.items():
                setattr(deposito, key, value)
            self.db.commit()
            self.db.refresh(deposito)
            return deposito
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def delete(self, deposito: Deposito) -> None:
        """Eliminar depósito junto con sus posiciones"""
        try:
            self.db.delete(deposito)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
