"""Generación de posiciones por rango."""
import pytest

from stockdepo.modules.posiciones.rango import (
    rango_letras, rango_numeros, contar_posiciones, generar_posiciones, formatear_coordenada
)


class TestRangoLetras:

    def test_inclusive_range(self):
        assert rango_letras("A", "D") == ["A", "B", "C", "D"]

    def test_single_letter(self):
        assert rango_letras("C", "C") == ["C"]

    def test_lowercase_is_normalized(self):
        assert rango_letras("a", "c") == ["A", "B", "C"]

    def test_inverted_range_rejected(self):
        with pytest.raises(ValueError):
            rango_letras("D", "A")

    def test_inverted_number_range_rejected(self):
        with pytest.raises(ValueError):
            rango_numeros(3, 1)


class TestGenerarPosiciones:

    @pytest.mark.parametrize("extremos", [
        ("A", "A", "A", "O", 1, 3, 1, 3),
        ("A", "C", "B", "D", 1, 1, 1, 2),
        ("B", "B", "Z", "Z", 2, 5, 4, 4),
    ])
    def test_count_matches_product_of_dimensions(self, extremos):
        rack_d, rack_h, col_d, col_h, niv_d, niv_h, prof_d, prof_h = extremos
        esperado = (
            (ord(rack_h) - ord(rack_d) + 1)
            * (ord(col_h) - ord(col_d) + 1)
            * (niv_h - niv_d + 1)
            * (prof_h - prof_d + 1)
        )
        posiciones = generar_posiciones(*extremos, estado="DISPONIBLE", deposito_id=1)

        assert len(posiciones) == esperado
        assert contar_posiciones(*extremos) == esperado

        coordenadas = {(p["rack"], p["columna"], p["nivel"], p["profundidad"]) for p in posiciones}
        assert len(coordenadas) == esperado

    def test_rows_carry_state_and_warehouse(self):
        posiciones = generar_posiciones("A", "A", "A", "B", 1, 1, 1, 1, estado="BLOQUEADO", deposito_id=7)

        assert posiciones == [
            {"rack": "A", "columna": "A", "nivel": 1, "profundidad": 1, "estado": "BLOQUEADO", "deposito_id": 7},
            {"rack": "A", "columna": "B", "nivel": 1, "profundidad": 1, "estado": "BLOQUEADO", "deposito_id": 7},
        ]

    def test_order_is_rack_column_level_depth(self):
        posiciones = generar_posiciones("A", "B", "A", "A", 1, 2, 1, 2, estado="DISPONIBLE", deposito_id=1)
        etiquetas = [
            formatear_coordenada(p["rack"], p["columna"], p["nivel"], p["profundidad"])
            for p in posiciones
        ]

        assert etiquetas == ["AA11", "AA12", "AA21", "AA22", "BA11", "BA12", "BA21", "BA22"]

    def test_inverted_level_range_rejected(self):
        with pytest.raises(ValueError):
            generar_posiciones("A", "A", "A", "A", 3, 1, 1, 1, estado="DISPONIBLE", deposito_id=1)
