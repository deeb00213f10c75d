# stockdepo/modules/depositos/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


def _nombre_requerido(v: Optional[str]) -> str:
    if v is None:
        raise ValueError('El nombre no puede ser nulo')
    v = v.strip()
    if not v:
        raise ValueError('El nombre no puede estar vacío')
    return v

class DepositoCreate(BaseModel):
    """Crear depósito"""
    nombre: str = Field(..., min_length=1, max_length=255, description="Nombre único del depósito")
    descripcion: Optional[str] = Field("", description="Descripción")

    @field_validator('nombre')
    @classmethod
    def strip_nombre(cls, v: str):
        return _nombre_requerido(v)

class DepositoUpdate(BaseModel):
    """Actualización parcial; el nombre, si se envía, no puede ser nulo ni vacío"""
    nombre: Optional[str] = Field(None, min_length=1, max_length=255)
    descripcion: Optional[str] = None

    @field_validator('nombre')
    @classmethod
    def strip_nombre(cls, v: Optional[str]):
        return _nombre_requerido(v)

class DepositoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    descripcion: Optional[str] = None
    created_at: Optional[datetime] = None
