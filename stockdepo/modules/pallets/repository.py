# stockdepo/modules/pallets/repository.py
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError

from stockdepo.shared.database.models import Pallet, Producto

class PalletRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self, estado: Optional[str] = None) -> List[Pallet]:
        query = self.db.query(Pallet).options(
            joinedload(Pallet.producto),
            joinedload(Pallet.posicion)
        )
        if estado:
            query = query.filter(Pallet.estado == estado)
        return query.order_by(desc(Pallet.created_at), desc(Pallet.id)).all()
    
    def get_by_id(self, pallet_id: int) -> Optional[Pallet]:
        return self.db.query(Pallet).options(
            joinedload(Pallet.producto),
            joinedload(Pallet.posicion)
        ).filter(Pallet.id == pallet_id).first()
    
    def exists_codigo(self, codigo: str) -> bool:
        return self.db.query(Pallet.id).filter(Pallet.codigo == codigo).first() is not None
    
    def get_producto(self, producto_id: int) -> Optional[Producto]:
        return self.db.query(Producto).filter(Producto.id == producto_id).first()
    
    def create(self, pallet_data: dict) -> Pallet:
        try:
            pallet = Pallet(**pallet_data)
            self.db.add(pallet)
            self.db.commit()
            return self.get_by_id(pallet.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def delete(self, pallet: Pallet) -> None:
        try:
            self.db.delete(pallet)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
