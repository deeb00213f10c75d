# stockdepo/modules/posiciones/service.py
import logging
from typing import List, Optional, Dict
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from .repository import PosicionRepository
from .schemas import (
    EstadoPosicion, RangoPosicionesCreate, PosicionUpdate,
    PosicionResponse, RangoPosicionesResponse, ResumenRacksResponse, EscenaResponse
)
from .rango import contar_posiciones, generar_posiciones, formatear_coordenada
from .visualizacion import construir_escena
from stockdepo.config.settings import settings
from stockdepo.modules.pallets.schemas import EstadoPallet
from stockdepo.shared.database.models import Posicion, Deposito, Pallet

logger = logging.getLogger(__name__)

# Posiciones de demostración: (rack, columna, nivel, profundidad)
POSICIONES_EJEMPLO = [
    ("A", "A", 3, 1),
    ("A", "C", 2, 2),
    ("A", "E", 1, 3),
]

MAX_CONFLICTOS_INFORMADOS = 20

class PosicionService:
    """
    Gestión de posiciones de rack: alta por rango, ocupación y escena 3D
    """
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = PosicionRepository(db)
    
    # ==================== CONSULTAS ====================
    
    def listar_posiciones(
        self,
        deposito_id: int,
        rack: Optional[str] = None,
        columna: Optional[str] = None,
        nivel: Optional[int] = None,
        estado: Optional[EstadoPosicion] = None
    ) -> List[PosicionResponse]:
        self._get_deposito(deposito_id)
        posiciones = self.repository.get_all(
            deposito_id=deposito_id,
            rack=rack.upper() if rack else None,
            columna=columna.upper() if columna else None,
            nivel=nivel,
            estado=estado.value if estado else None
        )
        return [build_posicion_response(p) for p in posiciones]
    
    def obtener_posicion(self, posicion_id: int) -> PosicionResponse:
        return build_posicion_response(self._get_posicion(posicion_id))
    
    def resumen_racks(self, deposito_id: int) -> ResumenRacksResponse:
        """Racks distintos y columnas de cada rack, ordenados"""
        self._get_deposito(deposito_id)
        columnas_por_rack: Dict[str, set] = {}
        for rack, columna, _, _ in self.repository.get_coordenadas(deposito_id):
            columnas_por_rack.setdefault(rack, set()).add(columna)
        
        return ResumenRacksResponse(
            deposito_id=deposito_id,
            racks=sorted(columnas_por_rack),
            columnas_por_rack={
                rack: sorted(columnas) for rack, columnas in sorted(columnas_por_rack.items())
            }
        )
    
    def construir_escena(
        self,
        deposito_id: Optional[int] = None,
        rack: Optional[str] = None,
        columna: Optional[str] = None,
        nivel: Optional[int] = None
    ) -> EscenaResponse:
        if deposito_id is not None:
            self._get_deposito(deposito_id)
        posiciones = [
            {
                "id": p.id,
                "deposito_id": p.deposito_id,
                "rack": p.rack,
                "columna": p.columna,
                "nivel": p.nivel,
                "profundidad": p.profundidad,
                "estado": p.estado,
            }
            for p in self.repository.get_all(deposito_id=deposito_id)
        ]
        escena = construir_escena(
            posiciones,
            rack=rack.upper() if rack else None,
            columna=columna.upper() if columna else None,
            nivel=nivel
        )
        return EscenaResponse(**escena)
    
    # ==================== ALTA POR RANGO ====================
    
    def crear_rango(self, data: RangoPosicionesCreate) -> RangoPosicionesResponse:
        """
        Genera todas las combinaciones del rango y las inserta de una vez.

        Rechaza rangos invertidos, rangos más grandes que el máximo configurado
        y coordenadas que ya existen en el depósito (no inserta ninguna).
        """
        self._get_deposito(data.deposito_id)
        extremos = (
            data.rack_desde, data.rack_hasta,
            data.columna_desde, data.columna_hasta,
            data.nivel_desde, data.nivel_hasta,
            data.profundidad_desde, data.profundidad_hasta,
        )
        
        try:
            cantidad = contar_posiciones(*extremos)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e)
            )
        
        if cantidad > settings.max_posiciones_por_rango:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"El rango genera {cantidad} posiciones; "
                    f"el máximo permitido es {settings.max_posiciones_por_rango}"
                )
            )
        
        nuevas = generar_posiciones(*extremos, estado=data.estado.value, deposito_id=data.deposito_id)
        
        existentes = self.repository.get_coordenadas(data.deposito_id)
        conflictos = [
            formatear_coordenada(p["rack"], p["columna"], p["nivel"], p["profundidad"])
            for p in nuevas
            if (p["rack"], p["columna"], p["nivel"], p["profundidad"]) in existentes
        ]
        if conflictos:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=(
                    f"{len(conflictos)} posiciones ya existen en el depósito: "
                    f"{', '.join(conflictos[:MAX_CONFLICTOS_INFORMADOS])}"
                )
            )
        
        self.repository.bulk_create(nuevas)
        logger.info(f"Rango creado en depósito {data.deposito_id}: {cantidad} posiciones")
        
        generadas = {(p["rack"], p["columna"], p["nivel"], p["profundidad"]) for p in nuevas}
        creadas = [
            p for p in self.repository.get_all(deposito_id=data.deposito_id)
            if (p.rack, p.columna, p.nivel, p.profundidad) in generadas
        ]
        return RangoPosicionesResponse(
            deposito_id=data.deposito_id,
            cantidad=len(creadas),
            posiciones=[build_posicion_response(p) for p in creadas]
        )
    
    def crear_posiciones_ejemplo(self, deposito_id: int) -> List[PosicionResponse]:
        """Inserta las posiciones de demostración que todavía no existan"""
        self._get_deposito(deposito_id)
        existentes = self.repository.get_coordenadas(deposito_id)
        
        nuevas = [
            {
                "rack": rack,
                "columna": columna,
                "nivel": nivel,
                "profundidad": profundidad,
                "estado": EstadoPosicion.OCUPADO.value,
                "deposito_id": deposito_id,
            }
            for rack, columna, nivel, profundidad in POSICIONES_EJEMPLO
            if (rack, columna, nivel, profundidad) not in existentes
        ]
        if nuevas:
            self.repository.bulk_create(nuevas)
        
        return [
            build_posicion_response(p)
            for p in self.repository.get_all(deposito_id=deposito_id)
            if (p.rack, p.columna, p.nivel, p.profundidad) in POSICIONES_EJEMPLO
        ]
    
    # ==================== EDICIÓN Y BAJA ====================
    
    def actualizar_posicion(self, posicion_id: int, data: PosicionUpdate) -> PosicionResponse:
        posicion = self._get_posicion(posicion_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if "estado" in update_data:
            update_data["estado"] = update_data["estado"].value
        
        if posicion.pallet is not None and update_data.get("estado", EstadoPosicion.OCUPADO.value) != EstadoPosicion.OCUPADO.value:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="La posición tiene un pallet ubicado; libérela antes de cambiar su estado"
            )
        
        coordenada_actual = (posicion.rack, posicion.columna, posicion.nivel, posicion.profundidad)
        coordenada_nueva = (
            update_data.get("rack", posicion.rack),
            update_data.get("columna", posicion.columna),
            update_data.get("nivel", posicion.nivel),
            update_data.get("profundidad", posicion.profundidad),
        )
        if coordenada_nueva != coordenada_actual and \
                coordenada_nueva in self.repository.get_coordenadas(posicion.deposito_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"La posición {formatear_coordenada(*coordenada_nueva)} ya existe en el depósito"
            )
        
        return build_posicion_response(self.repository.update(posicion, update_data))
    
    def eliminar_posicion(self, posicion_id: int) -> None:
        posicion = self._get_posicion(posicion_id)
        if posicion.pallet is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="La posición tiene un pallet ubicado"
            )
        self.repository.delete(posicion)
        logger.info(f"Posición {posicion.coordenada} eliminada del depósito {posicion.deposito_id}")
    
    # ==================== OCUPACIÓN ====================
    
    def asignar_pallet(self, posicion_id: int, pallet_id: int) -> PosicionResponse:
        """Ubica el pallet: la posición pasa a OCUPADO y el pallet a UBICADO"""
        posicion = self._get_posicion(posicion_id)
        pallet = self._get_pallet(pallet_id)
        
        if posicion.estado != EstadoPosicion.DISPONIBLE.value:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"La posición {posicion.coordenada} no está disponible (estado: {posicion.estado})"
            )
        if pallet.posicion is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"El pallet {pallet.codigo} ya está ubicado en {pallet.posicion.coordenada}"
            )
        
        posicion = self.repository.asignar_pallet(
            posicion, pallet,
            estado_posicion=EstadoPosicion.OCUPADO.value,
            estado_pallet=EstadoPallet.UBICADO.value
        )
        logger.info(f"Pallet {pallet.codigo} ubicado en {posicion.coordenada}")
        return build_posicion_response(posicion)
    
    def liberar_posicion(self, posicion_id: int) -> PosicionResponse:
        """La posición vuelve a DISPONIBLE y su pallet, si tenía, a POR_UBICAR"""
        posicion = self._get_posicion(posicion_id)
        posicion = self.repository.liberar(
            posicion,
            estado_posicion=EstadoPosicion.DISPONIBLE.value,
            estado_pallet=EstadoPallet.POR_UBICAR.value
        )
        logger.info(f"Posición {posicion.coordenada} liberada")
        return build_posicion_response(posicion)
    
    def alternar_posicion(self, posicion_id: int, pallet_id: Optional[int] = None) -> PosicionResponse:
        """Clic sobre una posición: si está disponible se asigna, si no se libera"""
        posicion = self._get_posicion(posicion_id)
        if posicion.estado == EstadoPosicion.DISPONIBLE.value:
            if pallet_id is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Ingrese el ID del pallet a asignar"
                )
            return self.asignar_pallet(posicion_id, pallet_id)
        return self.liberar_posicion(posicion_id)
    
    # ==================== HELPERS ====================
    
    def _get_deposito(self, deposito_id: int) -> Deposito:
        deposito = self.repository.get_deposito(deposito_id)
        if not deposito:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Depósito no encontrado"
            )
        return deposito
    
    def _get_posicion(self, posicion_id: int) -> Posicion:
        posicion = self.repository.get_by_id(posicion_id)
        if not posicion:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Posición no encontrada"
            )
        return posicion
    
    def _get_pallet(self, pallet_id: int) -> Pallet:
        pallet = self.repository.get_pallet(pallet_id)
        if not pallet:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Pallet no encontrado"
            )
        return pallet


def build_posicion_response(posicion: Posicion) -> PosicionResponse:
    pallet = posicion.pallet
    return PosicionResponse(
        id=posicion.id,
        deposito_id=posicion.deposito_id,
        rack=posicion.rack,
        columna=posicion.columna,
        nivel=posicion.nivel,
        profundidad=posicion.profundidad,
        estado=posicion.estado,
        coordenada=posicion.coordenada,
        pallet_id=pallet.id if pallet else None,
        pallet_codigo=pallet.codigo if pallet else None,
        created_at=posicion.created_at
    )
