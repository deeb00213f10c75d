# stockdepo/modules/productos/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from stockdepo.shared.database.models import Producto, Movimiento, Pallet

class ProductoRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    # ===== CONSULTAS =====
    
    def get_all(self, busqueda: Optional[str] = None) -> List[Producto]:
        query = self.db.query(Producto)
        if busqueda:
            query = query.filter(Producto.nombre.ilike(f"%{busqueda}%"))
        return query.order_by(Producto.nombre).all()
    
    def get_by_id(self, producto_id: int) -> Optional[Producto]:
        return self.db.query(Producto).filter(Producto.id == producto_id).first()
    
    def exists_codigo(self, codigo: str, exclude_id: Optional[int] = None) -> bool:
        """Verificar si ya existe otro producto con el mismo código"""
        query = self.db.query(Producto.id).filter(Producto.codigo == codigo)
        if exclude_id is not None:
            query = query.filter(Producto.id != exclude_id)
        return query.first() is not None
    
    def has_references(self, producto_id: int) -> bool:
        movimiento = self.db.query(Movimiento.id).filter(Movimiento.producto_id == producto_id).first()
        pallet = self.db.query(Pallet.id).filter(Pallet.producto_id == producto_id).first()
        return movimiento is not None or pallet is not None
    
    # ===== ESCRITURA =====
    
    def create(self, producto_data: dict) -> Producto:
        try:
            producto = Producto(**producto_data)
            self.db.add(producto)
            self.db.commit()
            self.db.refresh(producto)
            return producto
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def update(self, producto: Producto, update_data: dict) -> Producto:
        try:
            for key, value in update_data.items():
                setattr(producto, key, value)
            self.db.commit()
            self.db.refresh(producto)
            return producto
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def delete(self, producto: Producto) -> None:
        try:
            self.db.delete(producto)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
