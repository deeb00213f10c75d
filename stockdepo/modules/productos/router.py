# stockdepo/modules/productos/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from stockdepo.config.database import get_db
from .service import ProductoService
from .schemas import ProductoCreate, ProductoUpdate, ProductoResponse

router = APIRouter()

@router.get("", response_model=List[ProductoResponse])
async def listar_productos(
    busqueda: Optional[str] = Query(None, description="Filtrar por nombre (contiene)"),
    db: Session = Depends(get_db)
):
    """Listado de productos ordenado por nombre"""
    service = ProductoService(db)
    return service.listar_productos(busqueda)

@router.get("/{producto_id}", response_model=ProductoResponse)
async def obtener_producto(producto_id: int, db: Session = Depends(get_db)):
    service = ProductoService(db)
    return service.obtener_producto(producto_id)

@router.post("", response_model=ProductoResponse, status_code=status.HTTP_201_CREATED)
async def crear_producto(producto_data: ProductoCreate, db: Session = Depends(get_db)):
    """
    Crear producto

    **Validaciones:**
    - El código debe ser único
    """
    service = ProductoService(db)
    return service.crear_producto(producto_data)

@router.put("/{producto_id}", response_model=ProductoResponse)
async def actualizar_producto(
    producto_id: int,
    producto_data: ProductoUpdate,
    db: Session = Depends(get_db)
):
    service = ProductoService(db)
    return service.actualizar_producto(producto_id, producto_data)

@router.delete("/{producto_id}", status_code=status.HTTP_204_NO_CONTENT)
async def eliminar_producto(producto_id: int, db: Session = Depends(get_db)):
    """
    Eliminar producto

    No se permite si tiene movimientos o pallets asociados.
    """
    service = ProductoService(db)
    service.eliminar_producto(producto_id)
