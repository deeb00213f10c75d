# stockdepo/modules/movimientos/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import List, Optional
from datetime import datetime, date
from enum import Enum

class TipoMovimiento(str, Enum):
    """Tipos de movimiento de stock"""
    ENTRADA = "ENTRADA"        # Suma stock en el depósito destino
    SALIDA = "SALIDA"          # Resta stock del depósito origen
    TRASLADO = "TRASLADO"      # Entre depósitos, el stock total no cambia

# Alias del formulario con pallets
ALIAS_TIPO = {"MOVIMIENTO_INTERNO": TipoMovimiento.TRASLADO.value}

# ==================== REQUEST SCHEMAS ====================

class MovimientoCreate(BaseModel):
    """Registrar movimiento"""
    tipo: TipoMovimiento = Field(..., description="ENTRADA, SALIDA o TRASLADO")
    producto_id: int = Field(..., description="Producto movido")
    deposito_origen_id: Optional[int] = Field(None, description="Requerido en SALIDA y TRASLADO")
    deposito_destino_id: Optional[int] = Field(None, description="Requerido en ENTRADA y TRASLADO")
    posicion_origen_id: Optional[int] = Field(None, description="Posición dentro del depósito origen")
    posicion_destino_id: Optional[int] = Field(None, description="Posición dentro del depósito destino")
    cantidad: int = Field(..., gt=0, description="Cantidad movida")
    observaciones: Optional[str] = Field(None, description="Observaciones")

    @field_validator('tipo', mode='before')
    @classmethod
    def normalizar_tipo(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            return ALIAS_TIPO.get(v, v)
        return v

class PalletIngreso(BaseModel):
    """Pallet que llega con un ingreso"""
    codigo: str = Field(..., min_length=1, max_length=100, description="Código único del pallet")
    cantidad: int = Field(..., gt=0, description="Unidades en el pallet")
    descripcion: Optional[str] = Field("", description="Descripción")
    lote: Optional[str] = Field(None, description="Lote de fabricación")
    fecha_fabricacion: Optional[date] = None
    fecha_vencimiento: Optional[date] = None

    @model_validator(mode='after')
    def validar_fechas(self):
        if self.fecha_fabricacion and self.fecha_vencimiento and self.fecha_vencimiento < self.fecha_fabricacion:
            raise ValueError('La fecha de vencimiento no puede ser anterior a la de fabricación')
        return self

class IngresoPalletsCreate(BaseModel):
    """Ingreso de mercadería como contenedor de pallets"""
    producto_id: int = Field(..., description="Producto que ingresa")
    deposito_destino_id: int = Field(..., description="Depósito que recibe")
    posicion_destino_id: Optional[int] = Field(None, description="Posición de recepción")
    observaciones: Optional[str] = None
    pallets: List[PalletIngreso] = Field(..., min_length=1, description="Pallets del ingreso")

    @field_validator('pallets')
    @classmethod
    def codigos_distintos(cls, v: List[PalletIngreso]):
        codigos = [p.codigo for p in v]
        if len(codigos) != len(set(codigos)):
            raise ValueError('Hay códigos de pallet repetidos en el ingreso')
        return v

# ==================== RESPONSE SCHEMAS ====================

class MovimientoResponse(BaseModel):
    id: int
    tipo: str
    producto_id: int
    producto_codigo: Optional[str] = None
    producto_nombre: Optional[str] = None
    producto_stock: Optional[int] = None
    deposito_origen_id: Optional[int] = None
    deposito_origen_nombre: Optional[str] = None
    deposito_destino_id: Optional[int] = None
    deposito_destino_nombre: Optional[str] = None
    posicion_origen_id: Optional[int] = None
    posicion_origen: Optional[str] = None
    posicion_destino_id: Optional[int] = None
    posicion_destino: Optional[str] = None
    cantidad: int
    fecha: datetime
    observaciones: Optional[str] = None

class PalletIngresoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    codigo: str
    cantidad: int
    lote: Optional[str] = None
    fecha_fabricacion: Optional[date] = None
    fecha_vencimiento: Optional[date] = None
    estado: str

class IngresoPalletsResponse(BaseModel):
    movimiento: MovimientoResponse
    pallets: List[PalletIngresoResponse]
