# stockdepo/modules/movimientos/service.py
import logging
from typing import List, Optional, Dict, Any, Tuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from .repository import MovimientoRepository, AjusteStock
from .schemas import (
    TipoMovimiento, MovimientoCreate, IngresoPalletsCreate,
    MovimientoResponse, IngresoPalletsResponse, PalletIngresoResponse
)
from stockdepo.modules.depositos.repository import DepositoRepository
from stockdepo.modules.pallets.schemas import EstadoPallet
from stockdepo.shared.database.models import Movimiento, Producto

logger = logging.getLogger(__name__)


def delta_stock(tipo: str, cantidad: int) -> int:
    """Variación del stock total del producto según el tipo de movimiento"""
    if tipo == TipoMovimiento.ENTRADA.value:
        return cantidad
    if tipo == TipoMovimiento.SALIDA.value:
        return -cantidad
    return 0


def lados_usados(tipo: TipoMovimiento) -> Tuple[bool, bool]:
    """(usa origen, usa destino) según el tipo de movimiento"""
    return (
        tipo in (TipoMovimiento.SALIDA, TipoMovimiento.TRASLADO),
        tipo in (TipoMovimiento.ENTRADA, TipoMovimiento.TRASLADO),
    )


class MovimientoService:
    """
    Registro de movimientos de stock.

    El movimiento y el nuevo stock del producto se guardan en la misma
    transacción: si el stock resultante fuera negativo no se escribe nada.
    """
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = MovimientoRepository(db)
    
    # ==================== CONSULTAS ====================
    
    def listar_movimientos(
        self,
        tipo: Optional[TipoMovimiento] = None,
        producto_id: Optional[int] = None
    ) -> List[MovimientoResponse]:
        movimientos = self.repository.get_all(tipo.value if tipo else None, producto_id)
        return [self._build_response(m) for m in movimientos]
    
    def obtener_movimiento(self, movimiento_id: int) -> MovimientoResponse:
        return self._build_response(self._get_movimiento(movimiento_id))
    
    # ==================== REGISTRO ====================
    
    def registrar_movimiento(self, data: MovimientoCreate) -> MovimientoResponse:
        producto = self._get_producto(data.producto_id)
        self._validar_referencias(data)
        
        nuevo_stock = self._stock_resultante(producto, delta_stock(data.tipo.value, data.cantidad))
        
        movimiento = self.repository.create_with_stock(
            self._movimiento_data(data),
            [(producto, nuevo_stock)]
        )
        logger.info(
            f"Movimiento {movimiento.tipo} #{movimiento.id}: "
            f"{movimiento.cantidad} x {producto.codigo} -> stock {nuevo_stock}"
        )
        return self._build_response(movimiento)
    
    def actualizar_movimiento(self, movimiento_id: int, data: MovimientoCreate) -> MovimientoResponse:
        """Revierte el efecto del movimiento original y aplica el nuevo"""
        movimiento = self._get_movimiento(movimiento_id)
        # Bloqueo en orden de id
        bloqueados = {
            producto_id: self._get_producto(producto_id)
            for producto_id in sorted({movimiento.producto_id, data.producto_id})
        }
        producto_nuevo = bloqueados[data.producto_id]
        self._validar_referencias(data)
        
        delta_anterior = delta_stock(movimiento.tipo, movimiento.cantidad)
        delta_nuevo = delta_stock(data.tipo.value, data.cantidad)
        
        ajustes: List[AjusteStock] = []
        if producto_nuevo.id == movimiento.producto_id:
            ajustes.append((
                producto_nuevo,
                self._stock_resultante(producto_nuevo, delta_nuevo - delta_anterior)
            ))
        else:
            producto_anterior = bloqueados[movimiento.producto_id]
            ajustes.append((producto_anterior, self._stock_resultante(producto_anterior, -delta_anterior)))
            ajustes.append((producto_nuevo, self._stock_resultante(producto_nuevo, delta_nuevo)))
        
        movimiento = self.repository.update_with_stock(movimiento, self._movimiento_data(data), ajustes)
        logger.info(f"Movimiento #{movimiento_id} actualizado")
        return self._build_response(movimiento)
    
    def eliminar_movimiento(self, movimiento_id: int) -> None:
        movimiento = self._get_movimiento(movimiento_id)
        producto = self._get_producto(movimiento.producto_id)
        nuevo_stock = self._stock_resultante(producto, -delta_stock(movimiento.tipo, movimiento.cantidad))
        
        self.repository.delete_with_stock(movimiento, [(producto, nuevo_stock)])
        logger.info(f"Movimiento #{movimiento_id} eliminado, stock de {producto.codigo}: {nuevo_stock}")
    
    def registrar_ingreso_pallets(self, data: IngresoPalletsCreate) -> IngresoPalletsResponse:
        """
        Ingreso de mercadería en pallets.

        Crea un movimiento ENTRADA por la suma de los pallets y luego un pallet
        POR_UBICAR por cada uno, vinculado al movimiento.
        """
        producto = self._get_producto(data.producto_id)
        
        codigos = [p.codigo for p in data.pallets]
        repetidos = self.repository.existing_pallet_codes(codigos)
        if repetidos:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Ya existen pallets con los códigos: {', '.join(sorted(repetidos))}"
            )
        
        movimiento_create = MovimientoCreate(
            tipo=TipoMovimiento.ENTRADA,
            producto_id=data.producto_id,
            deposito_destino_id=data.deposito_destino_id,
            posicion_destino_id=data.posicion_destino_id,
            cantidad=sum(p.cantidad for p in data.pallets),
            observaciones=data.observaciones
        )
        self._validar_referencias(movimiento_create)
        nuevo_stock = self._stock_resultante(producto, movimiento_create.cantidad)
        
        pallets_data = [
            {
                **pallet.model_dump(),
                "producto_id": producto.id,
                "estado": EstadoPallet.POR_UBICAR.value
            }
            for pallet in data.pallets
        ]
        
        movimiento, pallets = self.repository.create_with_pallets(
            self._movimiento_data(movimiento_create),
            pallets_data,
            [(producto, nuevo_stock)]
        )
        logger.info(f"Ingreso #{movimiento.id} con {len(pallets)} pallets de {producto.codigo}")
        
        return IngresoPalletsResponse(
            movimiento=self._build_response(movimiento),
            pallets=[PalletIngresoResponse.model_validate(p) for p in pallets]
        )
    
    # ==================== VALIDACIONES ====================
    
    def _get_movimiento(self, movimiento_id: int) -> Movimiento:
        movimiento = self.repository.get_by_id(movimiento_id)
        if not movimiento:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Movimiento no encontrado"
            )
        return movimiento
    
    def _get_producto(self, producto_id: int) -> Producto:
        producto = self.repository.get_producto(producto_id)
        if not producto:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Producto no encontrado"
            )
        return producto
    
    def _stock_resultante(self, producto: Producto, delta: int) -> int:
        nuevo_stock = producto.stock + delta
        if nuevo_stock < 0:
            logger.warning(
                f"Stock insuficiente para {producto.codigo}: actual {producto.stock}, variación {delta}"
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No hay suficiente stock disponible"
            )
        return nuevo_stock
    
    def _validar_referencias(self, data: MovimientoCreate) -> None:
        """Depósitos requeridos por tipo y posiciones dentro del depósito elegido"""
        tipo = data.tipo
        
        if tipo == TipoMovimiento.ENTRADA and not data.deposito_destino_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Debe seleccionar un depósito destino para la entrada"
            )
        if tipo == TipoMovimiento.SALIDA and not data.deposito_origen_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Debe seleccionar un depósito origen para la salida"
            )
        if tipo == TipoMovimiento.TRASLADO and (not data.deposito_origen_id or not data.deposito_destino_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Debe seleccionar depósito origen y destino para el traslado"
            )
        
        usa_origen, usa_destino = lados_usados(tipo)
        depositos = DepositoRepository(self.db)
        for deposito_id, usado in ((data.deposito_origen_id, usa_origen), (data.deposito_destino_id, usa_destino)):
            if usado and deposito_id and not depositos.get_by_id(deposito_id):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Depósito {deposito_id} no encontrado"
                )
        
        # Las referencias del lado que el tipo no usa se descartan al guardar
        for posicion_id, deposito_id, lado, usado in (
            (data.posicion_origen_id, data.deposito_origen_id, "origen", usa_origen),
            (data.posicion_destino_id, data.deposito_destino_id, "destino", usa_destino),
        ):
            if not usado or not posicion_id:
                continue
            posicion = self.repository.get_posicion(posicion_id)
            if not posicion:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Posición {lado} no encontrada"
                )
            if posicion.deposito_id != deposito_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"La posición {lado} no pertenece al depósito {lado}"
                )
    
    # ==================== HELPERS ====================
    
    def _movimiento_data(self, data: MovimientoCreate) -> Dict[str, Any]:
        """Solo guarda las referencias que corresponden al tipo"""
        usa_origen, usa_destino = lados_usados(data.tipo)
        return {
            "tipo": data.tipo.value,
            "producto_id": data.producto_id,
            "deposito_origen_id": data.deposito_origen_id if usa_origen else None,
            "posicion_origen_id": data.posicion_origen_id if usa_origen else None,
            "deposito_destino_id": data.deposito_destino_id if usa_destino else None,
            "posicion_destino_id": data.posicion_destino_id if usa_destino else None,
            "cantidad": data.cantidad,
            "observaciones": data.observaciones,
        }
    
    def _build_response(self, movimiento: Movimiento) -> MovimientoResponse:
        producto = movimiento.producto
        origen = movimiento.deposito_origen
        destino = movimiento.deposito_destino
        return MovimientoResponse(
            id=movimiento.id,
            tipo=movimiento.tipo,
            producto_id=movimiento.producto_id,
            producto_codigo=producto.codigo if producto else None,
            producto_nombre=producto.nombre if producto else None,
            producto_stock=producto.stock if producto else None,
            deposito_origen_id=movimiento.deposito_origen_id,
            deposito_origen_nombre=origen.nombre if origen else None,
            deposito_destino_id=movimiento.deposito_destino_id,
            deposito_destino_nombre=destino.nombre if destino else None,
            posicion_origen_id=movimiento.posicion_origen_id,
            posicion_origen=movimiento.posicion_origen.coordenada if movimiento.posicion_origen else None,
            posicion_destino_id=movimiento.posicion_destino_id,
            posicion_destino=movimiento.posicion_destino.coordenada if movimiento.posicion_destino else None,
            cantidad=movimiento.cantidad,
            fecha=movimiento.fecha,
            observaciones=movimiento.observaciones
        )
