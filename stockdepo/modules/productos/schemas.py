# stockdepo/modules/productos/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


def _texto_requerido(v: Optional[str]) -> str:
    if v is None:
        raise ValueError('El campo no puede ser nulo')
    v = v.strip()
    if not v:
        raise ValueError('El campo no puede estar vacío')
    return v

class ProductoBase(BaseModel):
    codigo: str = Field(..., min_length=1, max_length=100, description="Código único del producto")
    nombre: str = Field(..., min_length=1, max_length=255, description="Nombre del producto")
    descripcion: Optional[str] = Field("", description="Descripción")
    unidad_medida: str = Field("UNIDAD", description="Unidad de medida (UNIDAD, CAJA, KG...)")
    unidades_por_caja: Optional[int] = Field(None, gt=0, description="Unidades de consumo por caja")
    cajas_por_pallet: Optional[int] = Field(None, gt=0, description="Cajas por pallet")
    unidades_por_pallet: Optional[int] = Field(None, gt=0, description="Unidades por pallet")

    @field_validator('codigo', 'nombre')
    @classmethod
    def strip_text(cls, v: str):
        return _texto_requerido(v)
class ProductoCreate(ProductoBase):
    """Crear producto. El stock inicial suele ser 0 y luego lo mueven los movimientos."""
    stock: int = Field(0, ge=0, description="Stock inicial")

class ProductoUpdate(BaseModel):
    """Actualización parcial de producto"""
    codigo: Optional[str] = Field(None, min_length=1, max_length=100)
    nombre: Optional[str] = Field(None, min_length=1, max_length=255)
    descripcion: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    unidad_medida: Optional[str] = None
    unidades_por_caja: Optional[int] = Field(None, gt=0)
    cajas_por_pallet: Optional[int] = Field(None, gt=0)
    unidades_por_pallet: Optional[int] = Field(None, gt=0)

    # Solo corren para campos enviados: omitirlos deja el valor actual
    @field_validator('codigo', 'nombre', 'unidad_medida')
    @classmethod
    def strip_text(cls, v: Optional[str]):
        return _texto_requerido(v)

    @field_validator('stock')
    @classmethod
    def stock_no_nulo(cls, v: Optional[int]):
        if v is None:
            raise ValueError('El stock no puede ser nulo')
        return v

class ProductoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    codigo: str
    nombre: str
    descripcion: Optional[str] = None
    stock: int
    unidad_medida: str
    unidades_por_caja: Optional[int] = None
    cajas_por_pallet: Optional[int] = None
    unidades_por_pallet: Optional[int] = None
    created_at: Optional[datetime] = None
