# stockdepo/modules/movimientos/repository.py
from typing import List, Optional, Tuple
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError

from stockdepo.shared.database.models import Movimiento, Producto, Posicion, Pallet

# (producto, nuevo_stock) a persistir junto con el movimiento
AjusteStock = Tuple[Producto, int]

class MovimientoRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    # ===== CONSULTAS =====
    
    def _query_completa(self):
        return self.db.query(Movimiento).options(
            joinedload(Movimiento.producto),
            joinedload(Movimiento.deposito_origen),
            joinedload(Movimiento.deposito_destino),
            joinedload(Movimiento.posicion_origen),
            joinedload(Movimiento.posicion_destino)
        )
    
    def get_all(
        self,
        tipo: Optional[str] = None,
        producto_id: Optional[int] = None
    ) -> List[Movimiento]:
        """Movimientos más recientes primero"""
        query = self._query_completa()
        if tipo:
            query = query.filter(Movimiento.tipo == tipo)
        if producto_id is not None:
            query = query.filter(Movimiento.producto_id == producto_id)
        return query.order_by(desc(Movimiento.fecha), desc(Movimiento.id)).all()
    
    def get_by_id(self, movimiento_id: int) -> Optional[Movimiento]:
        return self._query_completa().filter(Movimiento.id == movimiento_id).first()
    
    def query_producto_bloqueado(self, producto_id: int):
        """SELECT ... FOR UPDATE; relee el stock aunque el producto ya esté en la sesión"""
        return self.db.query(Producto)\
            .filter(Producto.id == producto_id)\
            .with_for_update()\
            .populate_existing()
    
    def get_producto(self, producto_id: int) -> Optional[Producto]:
        """Producto bloqueado hasta el commit o rollback del movimiento"""
        return self.query_producto_bloqueado(producto_id).first()
    
    def get_posicion(self, posicion_id: int) -> Optional[Posicion]:
        return self.db.query(Posicion).filter(Posicion.id == posicion_id).first()
    
    def existing_pallet_codes(self, codigos: List[str]) -> List[str]:
        rows = self.db.query(Pallet.codigo).filter(Pallet.codigo.in_(codigos)).all()
        return [row.codigo for row in rows]
    
    # ===== ESCRITURA (movimiento + stock en una transacción) =====
    
    def _aplicar_ajustes(self, ajustes: List[AjusteStock]) -> None:
        for producto, nuevo_stock in ajustes:
            producto.stock = nuevo_stock
    
    def create_with_stock(self, movimiento_data: dict, ajustes: List[AjusteStock]) -> Movimiento:
        try:
            movimiento = Movimiento(**movimiento_data)
            self.db.add(movimiento)
            self._aplicar_ajustes(ajustes)
            self.db.commit()
            return self.get_by_id(movimiento.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def update_with_stock(
        self,
        movimiento: Movimiento,
        update_data: dict,
        ajustes: List[AjusteStock]
    ) -> Movimiento:
        try:
            for key, value in update_data.items():
                setattr(movimiento, key, value)
            self._aplicar_ajustes(ajustes)
            self.db.commit()
            return self.get_by_id(movimiento.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def delete_with_stock(self, movimiento: Movimiento, ajustes: List[AjusteStock]) -> None:
        try:
            self.db.delete(movimiento)
            self._aplicar_ajustes(ajustes)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def create_with_pallets(
        self,
        movimiento_data: dict,
        pallets_data: List[dict],
        ajustes: List[AjusteStock]
    ) -> Tuple[Movimiento, List[Pallet]]:
        """Inserta el movimiento y luego sus pallets, con un solo commit"""
        try:
            movimiento = Movimiento(**movimiento_data)
            self.db.add(movimiento)
            self.db.flush()
            
            pallets = [
                Pallet(movimiento_id=movimiento.id, **pallet_data)
                for pallet_data in pallets_data
            ]
            self.db.add_all(pallets)
            self._aplicar_ajustes(ajustes)
            self.db.commit()
            
            for pallet in pallets:
                self.db.refresh(pallet)
            return self.get_by_id(movimiento.id), pallets
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
