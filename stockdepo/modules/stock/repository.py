# stockdepo/modules/stock/repository.py
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from stockdepo.shared.database.models import Producto, Movimiento, Deposito

class StockRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_productos(self, busqueda: Optional[str] = None) -> List[Producto]:
        query = self.db.query(Producto)
        if busqueda:
            query = query.filter(Producto.nombre.ilike(f"%{busqueda}%"))
        return query.order_by(Producto.nombre).all()
    
    def get_movimientos_por_producto(self, producto_ids: List[int]) -> Dict[int, List[Movimiento]]:
        """Historial completo de cada producto, en orden cronológico"""
        historial: Dict[int, List[Movimiento]] = {producto_id: [] for producto_id in producto_ids}
        if not producto_ids:
            return historial
        
        movimientos = self.db.query(Movimiento).options(
            joinedload(Movimiento.posicion_destino)
        ).filter(
            Movimiento.producto_id.in_(producto_ids)
        ).order_by(Movimiento.fecha, Movimiento.id).all()
        
        for movimiento in movimientos:
            historial[movimiento.producto_id].append(movimiento)
        return historial
    
    def get_nombres_depositos(self) -> Dict[int, str]:
        return {d.id: d.nombre for d in self.db.query(Deposito.id, Deposito.nombre).all()}
    
    def count_productos(self) -> int:
        return self.db.query(func.count(Producto.id)).scalar() or 0
    
    def sum_stock(self) -> int:
        return self.db.query(func.coalesce(func.sum(Producto.stock), 0)).scalar() or 0
    
    def get_tipos_cantidades(self) -> List[dict]:
        rows = self.db.query(Movimiento.tipo, Movimiento.cantidad).all()
        return [{"tipo": row.tipo, "cantidad": row.cantidad} for row in rows]
