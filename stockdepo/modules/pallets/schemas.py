# stockdepo/modules/pallets/schemas.py
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime, date
from enum import Enum

class EstadoPallet(str, Enum):
    """Estados de un pallet"""
    POR_UBICAR = "POR_UBICAR"    # Recibido, sin posición
    UBICADO = "UBICADO"          # En una posición de rack
    DESPACHADO = "DESPACHADO"    # Salió del depósito

class PalletCreate(BaseModel):
    """Crear pallet suelto (sin ingreso asociado)"""
    codigo: str = Field(..., min_length=1, max_length=100, description="Código único del pallet")
    producto_id: int = Field(..., description="Producto contenido")
    cantidad: int = Field(..., gt=0, description="Unidades en el pallet")
    descripcion: Optional[str] = Field("", description="Descripción")
    lote: Optional[str] = Field(None, description="Lote")
    fecha_fabricacion: Optional[date] = None
    fecha_vencimiento: Optional[date] = None

    @model_validator(mode='after')
    def validar_fechas(self):
        if self.fecha_fabricacion and self.fecha_vencimiento and self.fecha_vencimiento < self.fecha_fabricacion:
            raise ValueError('La fecha de vencimiento no puede ser anterior a la de fabricación')
        return self

class PalletResponse(BaseModel):
    id: int
    codigo: str
    descripcion: Optional[str] = None
    producto_id: int
    producto_codigo: Optional[str] = None
    producto_nombre: Optional[str] = None
    movimiento_id: Optional[int] = None
    cantidad: int
    lote: Optional[str] = None
    fecha_fabricacion: Optional[date] = None
    fecha_vencimiento: Optional[date] = None
    estado: str
    posicion_id: Optional[int] = None
    posicion: Optional[str] = None
    deposito_id: Optional[int] = None
    created_at: Optional[datetime] = None
