# stockdepo/modules/stock/agregador.py
"""
Stock por depósito reconstruido a partir del historial de movimientos.

No hay un saldo persistido por depósito: se recorre el historial completo de un
producto y se acumula por depósito.
"""
from typing import Any, Dict, Iterable

ENTRADA = "ENTRADA"
SALIDA = "SALIDA"
TRASLADO = "TRASLADO"


def _acumulado(stock: Dict[int, Dict[str, Any]], deposito_id: int) -> Dict[str, Any]:
    return stock.setdefault(deposito_id, {"cantidad": 0, "posiciones": []})


def _agregar_posicion(acumulado: Dict[str, Any], coordenada) -> None:
    if coordenada and coordenada not in acumulado["posiciones"]:
        acumulado["posiciones"].append(coordenada)


def agregar_stock_por_deposito(movimientos: Iterable[Dict[str, Any]]) -> Dict[int, Dict[str, Any]]:
    """
    Acumula cantidades por depósito.

    Cada movimiento es un dict con `tipo`, `cantidad`, `deposito_origen_id`,
    `deposito_destino_id` y opcionalmente `posicion_destino` (coordenada ya
    formateada). ENTRADA suma al destino, SALIDA resta del origen y TRASLADO
    hace ambas cosas. Las posiciones de destino se guardan sin repetir, en el
    orden en que aparecen.
    """
    stock: Dict[int, Dict[str, Any]] = {}

    for movimiento in movimientos:
        tipo = movimiento["tipo"]
        cantidad = movimiento["cantidad"]
        origen = movimiento.get("deposito_origen_id")
        destino = movimiento.get("deposito_destino_id")

        if tipo in (SALIDA, TRASLADO) and origen is not None:
            _acumulado(stock, origen)["cantidad"] -= cantidad

        if tipo in (ENTRADA, TRASLADO) and destino is not None:
            acumulado = _acumulado(stock, destino)
            acumulado["cantidad"] += cantidad
            _agregar_posicion(acumulado, movimiento.get("posicion_destino"))

    return stock


def totales_dashboard(movimientos: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    """Suma de cantidades de entradas y de salidas; los traslados no cuentan"""
    entradas = 0
    salidas = 0
    for movimiento in movimientos:
        if movimiento["tipo"] == ENTRADA:
            entradas += movimiento["cantidad"]
        elif movimiento["tipo"] == SALIDA:
            salidas += movimiento["cantidad"]
    return {"total_entradas": entradas, "total_salidas": salidas}
