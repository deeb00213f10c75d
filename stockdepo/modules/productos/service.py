# stockdepo/modules/productos/service.py
import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from .repository import ProductoRepository
from .schemas import ProductoCreate, ProductoUpdate
from stockdepo.shared.database.models import Producto

logger = logging.getLogger(__name__)

class ProductoService:
    """
    Catálogo de productos: alta, edición y baja
    """
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductoRepository(db)
    
    def listar_productos(self, busqueda: Optional[str] = None) -> List[Producto]:
        return self.repository.get_all(busqueda)
    
    def obtener_producto(self, producto_id: int) -> Producto:
        producto = self.repository.get_by_id(producto_id)
        if not producto:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Producto no encontrado"
            )
        return producto
    
    def _validar_codigo_unico(self, codigo: str, exclude_id: Optional[int] = None):
        if self.repository.exists_codigo(codigo, exclude_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Ya existe un producto con este código"
            )
    
    def crear_producto(self, producto_data: ProductoCreate) -> Producto:
        self._validar_codigo_unico(producto_data.codigo)
        producto = self.repository.create(producto_data.model_dump())
        logger.info(f"Producto creado: {producto.codigo} (id={producto.id})")
        return producto
    
    def actualizar_producto(self, producto_id: int, producto_data: ProductoUpdate) -> Producto:
        producto = self.obtener_producto(producto_id)
        update_data = producto_data.model_dump(exclude_unset=True)
        
        if "codigo" in update_data:
            self._validar_codigo_unico(update_data["codigo"], exclude_id=producto_id)
        
        return self.repository.update(producto, update_data)
    
    def eliminar_producto(self, producto_id: int) -> None:
        producto = self.obtener_producto(producto_id)
        
        if self.repository.has_references(producto_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="El producto tiene movimientos o pallets asociados"
            )
        
        self.repository.delete(producto)
        logger.info(f"Producto eliminado: {producto.codigo} (id={producto_id})")
