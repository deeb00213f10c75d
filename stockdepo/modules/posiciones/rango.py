# stockdepo/modules/posiciones/rango.py
"""
Generación de posiciones por rango.

Expande el producto cartesiano rack × columna × nivel × profundidad en filas
de posición listas para un insert masivo.
"""
from itertools import product
from typing import Dict, Iterator, List, Any


def rango_letras(desde: str, hasta: str) -> List[str]:
    """Letras de `desde` a `hasta`, inclusive, por código de carácter"""
    inicio, fin = ord(desde.upper()), ord(hasta.upper())
    if inicio > fin:
        raise ValueError(f"Rango de letras inválido: {desde} > {hasta}")
    return [chr(codigo) for codigo in range(inicio, fin + 1)]


def rango_numeros(desde: int, hasta: int) -> List[int]:
    if desde > hasta:
        raise ValueError(f"Rango numérico inválido: {desde} > {hasta}")
    return list(range(desde, hasta + 1))


def contar_posiciones(
    rack_desde: str, rack_hasta: str,
    columna_desde: str, columna_hasta: str,
    nivel_desde: int, nivel_hasta: int,
    profundidad_desde: int, profundidad_hasta: int
) -> int:
    """Cantidad de posiciones que generaría el rango, sin generarlas"""
    return (
        len(rango_letras(rack_desde, rack_hasta))
        * len(rango_letras(columna_desde, columna_hasta))
        * len(rango_numeros(nivel_desde, nivel_hasta))
        * len(rango_numeros(profundidad_desde, profundidad_hasta))
    )


def iterar_coordenadas(
    rack_desde: str, rack_hasta: str,
    columna_desde: str, columna_hasta: str,
    nivel_desde: int, nivel_hasta: int,
    profundidad_desde: int, profundidad_hasta: int
) -> Iterator[tuple]:
    """Tuplas (rack, columna, nivel, profundidad) en orden de rack, columna, nivel, profundidad"""
    return product(
        rango_letras(rack_desde, rack_hasta),
        rango_letras(columna_desde, columna_hasta),
        rango_numeros(nivel_desde, nivel_hasta),
        rango_numeros(profundidad_desde, profundidad_hasta),
    )


def generar_posiciones(
    rack_desde: str, rack_hasta: str,
    columna_desde: str, columna_hasta: str,
    nivel_desde: int, nivel_hasta: int,
    profundidad_desde: int, profundidad_hasta: int,
    estado: str,
    deposito_id: int
) -> List[Dict[str, Any]]:
    """
    Genera una fila por cada combinación del rango.

    Lanza ValueError si algún extremo inicial es mayor que el final.
    """
    return [
        {
            "rack": rack,
            "columna": columna,
            "nivel": nivel,
            "profundidad": profundidad,
            "estado": estado,
            "deposito_id": deposito_id,
        }
        for rack, columna, nivel, profundidad in iterar_coordenadas(
            rack_desde, rack_hasta,
            columna_desde, columna_hasta,
            nivel_desde, nivel_hasta,
            profundidad_desde, profundidad_hasta
        )
    ]


def formatear_coordenada(rack: str, columna: str, nivel: int, profundidad: int) -> str:
    return f"{rack}{columna}{nivel}{profundidad}"
