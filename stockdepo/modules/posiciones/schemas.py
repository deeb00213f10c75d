# stockdepo/modules/posiciones/schemas.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict
from datetime import datetime
from enum import Enum

class EstadoPosicion(str, Enum):
    """Estados de una posición de rack"""
    DISPONIBLE = "DISPONIBLE"
    OCUPADO = "OCUPADO"
    BLOQUEADO = "BLOQUEADO"    # Fuera de uso (mantenimiento, daño)


def _letra(v: str) -> str:
    if not isinstance(v, str) or len(v.strip()) != 1 or not v.strip().isalpha() or not v.strip().isascii():
        raise ValueError('Debe ser una única letra (A-Z)')
    return v.strip().upper()

# ==================== REQUEST SCHEMAS ====================

class RangoPosicionesCreate(BaseModel):
    """
    Creación de posiciones por rango.

    Se genera una posición por cada combinación rack × columna × nivel × profundidad.
    """
    deposito_id: int = Field(..., description="Depósito de las posiciones")
    rack_desde: str = Field("A", description="Rack inicial (letra)")
    rack_hasta: str = Field("A", description="Rack final (letra)")
    columna_desde: str = Field("A", description="Columna inicial (letra)")
    columna_hasta: str = Field("O", description="Columna final (letra)")
    nivel_desde: int = Field(1, ge=1, description="Nivel inicial")
    nivel_hasta: int = Field(3, ge=1, description="Nivel final")
    profundidad_desde: int = Field(1, ge=1, description="Profundidad inicial")
    profundidad_hasta: int = Field(3, ge=1, description="Profundidad final")
    estado: EstadoPosicion = Field(EstadoPosicion.DISPONIBLE, description="Estado inicial")

    @field_validator('rack_desde', 'rack_hasta', 'columna_desde', 'columna_hasta')
    @classmethod
    def validar_letra(cls, v: str):
        return _letra(v)

class PosicionUpdate(BaseModel):
    """Edición de una posición puntual"""
    rack: Optional[str] = None
    columna: Optional[str] = None
    nivel: Optional[int] = Field(None, ge=1)
    profundidad: Optional[int] = Field(None, ge=1)
    estado: Optional[EstadoPosicion] = None

    @field_validator('rack', 'columna')
    @classmethod
    def validar_letra(cls, v: Optional[str]):
        return _letra(v) if v is not None else v

class AsignarPalletRequest(BaseModel):
    pallet_id: int = Field(..., description="Pallet a ubicar en la posición")

class AlternarPosicionRequest(BaseModel):
    pallet_id: Optional[int] = Field(None, description="Requerido si la posición está disponible")

# ==================== RESPONSE SCHEMAS ====================

class PosicionResponse(BaseModel):
    id: int
    deposito_id: int
    rack: str
    columna: str
    nivel: int
    profundidad: int
    estado: str
    coordenada: str
    pallet_id: Optional[int] = None
    pallet_codigo: Optional[str] = None
    created_at: Optional[datetime] = None

class RangoPosicionesResponse(BaseModel):
    deposito_id: int
    cantidad: int
    posiciones: List[PosicionResponse]

class ResumenRacksResponse(BaseModel):
    """Racks y columnas existentes, para los filtros en cascada"""
    deposito_id: int
    racks: List[str]
    columnas_por_rack: Dict[str, List[str]]

# ==================== ESCENA 3D ====================

class ElementoEstructura(BaseModel):
    tipo: str
    posicion: List[float]
    tamanio: List[float]
    color: str

class CeldaEscena(BaseModel):
    posicion_id: int
    etiqueta: str
    estado: str
    color: str
    posicion: List[float]
    tamanio: List[float]

class RackEscena(BaseModel):
    deposito_id: int
    rack: str
    desplazamiento: List[float]
    estructura: List[ElementoEstructura]
    celdas: List[CeldaEscena]

class EscenaResponse(BaseModel):
    total_posiciones: int
    racks: List[RackEscena]
