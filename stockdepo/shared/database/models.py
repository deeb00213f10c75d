from sqlalchemy import Column, Integer, String, DateTime, Date, Text, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from stockdepo.config.database import Base

# ===== CATÁLOGO =====

class Producto(Base):
    """Producto del catálogo. `stock` lo mantienen los movimientos."""
    __tablename__ = "productos"

    id = Column(Integer, primary_key=True, index=True)
    codigo = Column(String(100), unique=True, nullable=False, index=True)
    nombre = Column(String(255), nullable=False, index=True)
    descripcion = Column(Text, default="")
    stock = Column(Integer, default=0, nullable=False)
    unidad_medida = Column(String(50), default="UNIDAD", nullable=False)
    unidades_por_caja = Column(Integer)
    cajas_por_pallet = Column(Integer)
    unidades_por_pallet = Column(Integer)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    __table_args__ = (
        CheckConstraint("stock >= 0", name="productos_stock_no_negativo"),
    )

    # Relationships
    movimientos = relationship("Movimiento", back_populates="producto")
    pallets = relationship("Pallet", back_populates="producto")

class Deposito(Base):
    """Depósito (warehouse). El nombre es único."""
    __tablename__ = "depositos"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(255), unique=True, nullable=False)
    descripcion = Column(Text, default="")
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    posiciones = relationship(
        "Posicion",
        back_populates="deposito",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

# ===== POSICIONES Y PALLETS =====

class Posicion(Base):
    """Posición de rack dentro de un depósito"""
    __tablename__ = "posiciones"

    id = Column(Integer, primary_key=True, index=True)
    deposito_id = Column(Integer, ForeignKey("depositos.id", ondelete="CASCADE"), nullable=False, index=True)
    rack = Column(String(1), nullable=False)
    columna = Column(String(1), nullable=False)
    nivel = Column(Integer, nullable=False)
    profundidad = Column(Integer, nullable=False)
    estado = Column(String(50), default="DISPONIBLE", nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    __table_args__ = (
        UniqueConstraint('deposito_id', 'rack', 'columna', 'nivel', 'profundidad', name='posiciones_coordenada_unica'),
    )

    # Relationships
    deposito = relationship("Deposito", back_populates="posiciones")
    pallet = relationship("Pallet", back_populates="posicion", uselist=False)

    @property
    def coordenada(self):
        return f"{self.rack}{self.columna}{self.nivel}{self.profundidad}"

class Pallet(Base):
    """Pallet de un lote de producto, ubicado opcionalmente en una posición"""
    __tablename__ = "pallets"

    id = Column(Integer, primary_key=True, index=True)
    codigo = Column(String(100), unique=True, nullable=False, index=True)
    descripcion = Column(Text, default="")
    producto_id = Column(Integer, ForeignKey("productos.id"), nullable=False, index=True)
    movimiento_id = Column(Integer, ForeignKey("movimientos.id", ondelete="SET NULL"))
    cantidad = Column(Integer, nullable=False)
    lote = Column(String(100))
    fecha_fabricacion = Column(Date)
    fecha_vencimiento = Column(Date)
    estado = Column(String(50), default="POR_UBICAR", nullable=False)
    posicion_id = Column(Integer, ForeignKey("posiciones.id", ondelete="SET NULL"))
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    producto = relationship("Producto", back_populates="pallets")
    movimiento = relationship("Movimiento", back_populates="pallets")
    posicion = relationship("Posicion", back_populates="pallet")

# ===== MOVIMIENTOS =====

class Movimiento(Base):
    """Movimiento de stock: ENTRADA, SALIDA o TRASLADO"""
    __tablename__ = "movimientos"

    id = Column(Integer, primary_key=True, index=True)
    tipo = Column(String(20), nullable=False, index=True)
    producto_id = Column(Integer, ForeignKey("productos.id"), nullable=False, index=True)
    deposito_origen_id = Column(Integer, ForeignKey("depositos.id"))
    deposito_destino_id = Column(Integer, ForeignKey("depositos.id"))
    posicion_origen_id = Column(Integer, ForeignKey("posiciones.id", ondelete="SET NULL"))
    posicion_destino_id = Column(Integer, ForeignKey("posiciones.id", ondelete="SET NULL"))
    cantidad = Column(Integer, nullable=False)
    fecha = Column(DateTime, server_default=func.current_timestamp(), nullable=False)
    observaciones = Column(Text)

    # Relationships
    producto = relationship("Producto", back_populates="movimientos")
    deposito_origen = relationship("Deposito", foreign_keys=[deposito_origen_id])
    deposito_destino = relationship("Deposito", foreign_keys=[deposito_destino_id])
    posicion_origen = relationship("Posicion", foreign_keys=[posicion_origen_id])
    posicion_destino = relationship("Posicion", foreign_keys=[posicion_destino_id])
    pallets = relationship("Pallet", back_populates="movimiento")
