"""Tests for the semicolon-delimited CSV exports."""

from __future__ import annotations

from factories import make_hive, make_inspection
from melipro.schemas.inspection import InspectionDetails
from melipro.services.export.csv_export import (
    BOM,
    DELETED_HIVE_LABEL,
    HIVE_HEADER,
    INSPECTION_HEADER,
    hives_csv,
    inspections_csv,
    sanitize,
)


def _rows(text: str) -> list[list[str]]:
    assert text.startswith(BOM)
    lines = text[len(BOM):].split("\n")
    assert lines[-1] == ""
    return [line.split(";") for line in lines[:-1]]


def test_sanitize():
    assert sanitize("a;b\r\nc\rd\ne") == "a,b c d e"
    assert sanitize(None) == ""
    assert sanitize("") == ""


class TestHivesCsv:
    def test_name_with_semicolon_and_newline(self):
        hives = [
            make_hive("a", name="Caixa;01\nNova", origin="", date_established="2023-01-15"),
            make_hive("b", location="Guarapuava-Meliponário", last_intervention_date="xx"),
        ]
        rows = _rows(hives_csv(hives))

        assert rows[0] == list(HIVE_HEADER)
        assert len(rows) == 1 + len(hives)
        assert all(len(r) == len(HIVE_HEADER) for r in rows)

        first = rows[1]
        assert first[1] == "Caixa,01 Nova"
        assert first[2] == "Jataí"
        assert first[3] == "Mista/Outra"
        assert first[4] == "15/01/2023"
        assert first[5] == "-"
        assert first[8] == "-"
        assert first[10] == "INPA"

        assert rows[2][5] == "-"
        assert rows[2][7] == "Guarapuava-Meliponário"

    def test_empty_collection_has_header_only(self):
        assert _rows(hives_csv([])) == [list(HIVE_HEADER)]


class TestInspectionsCsv:
    def test_columns_and_order(self):
        hives = [make_hive("a", name="CX-A")]
        inspections = [
            make_inspection("1", hive_id="a", date="2024-01-05", notes="obs; com\nquebra"),
            make_inspection(
                "2",
                hive_id="a",
                date="2024-03-10",
                details=InspectionDetails(populacao="B", fornecido=["X", "P"], preparar_para="V"),
            ),
            make_inspection("3", hive_id="removed", date="2024-02-01"),
        ]
        rows = _rows(inspections_csv(hives, inspections))

        assert rows[0] == list(INSPECTION_HEADER)
        assert len(INSPECTION_HEADER) == 26
        assert all(len(r) == 26 for r in rows)

        assert [r[0] for r in rows[1:]] == ["10/03/2024", "01/02/2024", "05/01/2024"]

        newest = rows[1]
        assert newest[1] == "CX-A"
        assert newest[3] == "Vistoria Geral"
        assert newest[4] == "B"
        assert newest[9] == "X+P"
        assert newest[24] == "V"

        orphan = rows[2]
        assert orphan[1] == DELETED_HIVE_LABEL
        assert orphan[2] == "-"

        assert rows[3][25] == "obs, com quebra"
