# stockdepo/modules/posiciones/visualizacion.py
"""
Escena 3D de racks.

Solo describe la geometría (cajas, vigas y columnas con color); el dibujo
queda a cargo del cliente.
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .rango import formatear_coordenada

SEPARACION_RACKS = 30
ANCHO_COLUMNA = 3.5
ALTO_NIVEL = 2
FONDO_PROFUNDIDAD = 4
TAMANIO_CELDA = [2.8, 1.5, 2]

COLOR_OCUPADO = "#ef4444"
COLOR_DISPONIBLE = "#22c55e"
COLOR_OTRO = "#d1d5db"
COLOR_VIGA = "#f97316"
COLOR_PARANTE = "#1e3a8a"


def color_por_estado(estado: str) -> str:
    if estado == "OCUPADO":
        return COLOR_OCUPADO
    if estado == "DISPONIBLE":
        return COLOR_DISPONIBLE
    return COLOR_OTRO


def indice_columna(columna: str) -> int:
    return ord(columna) - ord("A")


def posicion_celda(columna: str, nivel: int, profundidad: int) -> List[float]:
    return [
        indice_columna(columna) * ANCHO_COLUMNA,
        (nivel - 1) * ALTO_NIVEL + 1,
        (profundidad - 1) * FONDO_PROFUNDIDAD,
    ]


def filtrar_posiciones(
    posiciones: Iterable[Dict[str, Any]],
    deposito_id: Optional[int] = None,
    rack: Optional[str] = None,
    columna: Optional[str] = None,
    nivel: Optional[int] = None
) -> List[Dict[str, Any]]:
    filtradas = list(posiciones)
    if deposito_id is not None:
        filtradas = [p for p in filtradas if p["deposito_id"] == deposito_id]
    if rack:
        filtradas = [p for p in filtradas if p["rack"] == rack]
    if columna:
        filtradas = [p for p in filtradas if p["columna"] == columna]
    if nivel is not None:
        filtradas = [p for p in filtradas if p["nivel"] == nivel]
    return filtradas


def _estructura_rack(posiciones: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Vigas por nivel y parantes por columna, al frente y al fondo"""
    niveles = max((p["nivel"] for p in posiciones), default=0)
    columnas = max((indice_columna(p["columna"]) for p in posiciones), default=-1) + 1
    profundidades = max((p["profundidad"] for p in posiciones), default=1)
    largo = columnas * ANCHO_COLUMNA
    fondo = profundidades * FONDO_PROFUNDIDAD

    elementos = []
    for z in (0, fondo):
        for nivel in range(niveles + 1):
            elementos.append({
                "tipo": "viga",
                "posicion": [largo / 2, nivel * ALTO_NIVEL, z],
                "tamanio": [largo, 0.1, 0.1],
                "color": COLOR_VIGA,
            })
        for indice in range(columnas + 1):
            elementos.append({
                "tipo": "parante",
                "posicion": [indice * ANCHO_COLUMNA, niveles * ALTO_NIVEL / 2, z],
                "tamanio": [0.1, niveles * ALTO_NIVEL, 0.1],
                "color": COLOR_PARANTE,
            })
    return elementos


def construir_escena(
    posiciones: Iterable[Dict[str, Any]],
    deposito_id: Optional[int] = None,
    rack: Optional[str] = None,
    columna: Optional[str] = None,
    nivel: Optional[int] = None
) -> Dict[str, Any]:
    """
    Agrupa las posiciones por (depósito, rack) y calcula una caja por posición.

    Racks con la misma letra en depósitos distintos son grupos separados.
    Cada rack se desplaza SEPARACION_RACKS unidades en x respecto del anterior.
    """
    filtradas = filtrar_posiciones(posiciones, deposito_id, rack, columna, nivel)

    grupos: Dict[Tuple[int, str], List[Dict[str, Any]]] = {}
    for posicion in filtradas:
        grupos.setdefault((posicion["deposito_id"], posicion["rack"]), []).append(posicion)

    racks = []
    for indice, ((deposito_rack, nombre_rack), posiciones_rack) in enumerate(sorted(grupos.items())):
        celdas = [
            {
                "posicion_id": p["id"],
                "etiqueta": formatear_coordenada(p["rack"], p["columna"], p["nivel"], p["profundidad"]),
                "estado": p["estado"],
                "color": color_por_estado(p["estado"]),
                "posicion": posicion_celda(p["columna"], p["nivel"], p["profundidad"]),
                "tamanio": TAMANIO_CELDA,
            }
            for p in posiciones_rack
        ]
        racks.append({
            "deposito_id": deposito_rack,
            "rack": nombre_rack,
            "desplazamiento": [indice * SEPARACION_RACKS, 0, 0],
            "estructura": _estructura_rack(posiciones_rack),
            "celdas": celdas,
        })

    return {
        "total_posiciones": len(filtradas),
        "racks": racks,
    }
