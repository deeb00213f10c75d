# stockdepo/modules/posiciones/repository.py
from typing import List, Optional, Set, Tuple
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError

from stockdepo.shared.database.models import Posicion, Pallet, Deposito

Coordenada = Tuple[str, str, int, int]

class PosicionRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    # ===== CONSULTAS =====
    
    def get_all(
        self,
        deposito_id: Optional[int] = None,
        rack: Optional[str] = None,
        columna: Optional[str] = None,
        nivel: Optional[int] = None,
        estado: Optional[str] = None
    ) -> List[Posicion]:
        query = self.db.query(Posicion).options(joinedload(Posicion.pallet))
        
        if deposito_id is not None:
            query = query.filter(Posicion.deposito_id == deposito_id)
        if rack:
            query = query.filter(Posicion.rack == rack)
        if columna:
            query = query.filter(Posicion.columna == columna)
        if nivel is not None:
            query = query.filter(Posicion.nivel == nivel)
        if estado:
            query = query.filter(Posicion.estado == estado)
        
        return query.order_by(
            Posicion.rack,
            Posicion.columna,
            Posicion.nivel,
            Posicion.profundidad
        ).all()
    
    def get_by_id(self, posicion_id: int) -> Optional[Posicion]:
        return self.db.query(Posicion).options(joinedload(Posicion.pallet))\
            .filter(Posicion.id == posicion_id).first()
    
    def get_deposito(self, deposito_id: int) -> Optional[Deposito]:
        return self.db.query(Deposito).filter(Deposito.id == deposito_id).first()
    
    def get_pallet(self, pallet_id: int) -> Optional[Pallet]:
        return self.db.query(Pallet).options(joinedload(Pallet.posicion))\
            .filter(Pallet.id == pallet_id).first()
    
    def get_coordenadas(self, deposito_id: int) -> Set[Coordenada]:
        """Coordenadas ya ocupadas por filas del depósito"""
        rows = self.db.query(
            Posicion.rack, Posicion.columna, Posicion.nivel, Posicion.profundidad
        ).filter(Posicion.deposito_id == deposito_id).all()
        return {(r.rack, r.columna, r.nivel, r.profundidad) for r in rows}
    
    # ===== ESCRITURA =====
    
    def bulk_create(self, posiciones_data: List[dict]) -> None:
        """Insert masivo de todas las posiciones en una sola transacción"""
        try:
            self.db.add_all([Posicion(**data) for data in posiciones_data])
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def update(self, posicion: Posicion, update_data: dict) -> Posicion:
        try:
            for key, value in update_data.items():
                setattr(posicion, key, value)
            self.db.commit()
            return self.get_by_id(posicion.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def delete(self, posicion: Posicion) -> None:
        try:
            self.db.delete(posicion)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def asignar_pallet(self, posicion: Posicion, pallet: Pallet, estado_posicion: str, estado_pallet: str) -> Posicion:
        """Vincula pallet y posición actualizando ambos estados"""
        try:
            posicion.estado = estado_posicion
            pallet.estado = estado_pallet
            pallet.posicion = posicion
            self.db.commit()
            return self.get_by_id(posicion.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
    
    def liberar(self, posicion: Posicion, estado_posicion: str, estado_pallet: str) -> Posicion:
        try:
            pallet = posicion.pallet
            posicion.estado = estado_posicion
            if pallet is not None:
                pallet.estado = estado_pallet
                posicion.pallet = None
            self.db.commit()
            return self.get_by_id(posicion.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e
