# stockdepo/modules/stock/service.py
from typing import List, Optional
from sqlalchemy.orm import Session

from .repository import StockRepository
from .schemas import ProductoStock, StockDeposito, DashboardStats
from .agregador import agregar_stock_por_deposito, totales_dashboard

class StockService:
    """
    Vista de stock por depósito y estadísticas del tablero
    """
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = StockRepository(db)
    
    def stock_por_producto(self, busqueda: Optional[str] = None) -> List[ProductoStock]:
        """
        Para cada producto recorre su historial de movimientos y agrupa la
        cantidad por depósito, junto con las posiciones que recibieron stock.
        """
        productos = self.repository.get_productos(busqueda)
        historial = self.repository.get_movimientos_por_producto([p.id for p in productos])
        nombres = self.repository.get_nombres_depositos()
        
        resultado = []
        for producto in productos:
            acumulado = agregar_stock_por_deposito(
                {
                    "tipo": m.tipo,
                    "cantidad": m.cantidad,
                    "deposito_origen_id": m.deposito_origen_id,
                    "deposito_destino_id": m.deposito_destino_id,
                    "posicion_destino": m.posicion_destino.coordenada if m.posicion_destino else None,
                }
                for m in historial[producto.id]
            )
            depositos = [
                StockDeposito(
                    deposito_id=deposito_id,
                    deposito_nombre=nombres.get(deposito_id, "Desconocido"),
                    cantidad=datos["cantidad"],
                    posiciones=datos["posiciones"]
                )
                for deposito_id, datos in acumulado.items()
            ]
            resultado.append(ProductoStock(
                id=producto.id,
                codigo=producto.codigo,
                nombre=producto.nombre,
                descripcion=producto.descripcion,
                stock=producto.stock,
                unidad_medida=producto.unidad_medida,
                depositos=depositos
            ))
        return resultado
    
    def estadisticas_dashboard(self) -> DashboardStats:
        totales = totales_dashboard(self.repository.get_tipos_cantidades())
        return DashboardStats(
            total_productos=self.repository.count_productos(),
            total_stock=self.repository.sum_stock(),
            total_entradas=totales["total_entradas"],
            total_salidas=totales["total_salidas"]
        )
