"""Tests for the versioned blob codec."""

from __future__ import annotations

import json

import pytest

from factories import make_hive, make_inspection
from melipro.schemas.commons import HiveClassification, HiveGenetics
from melipro.schemas.inspection import InspectionDetails
from melipro.services.storage.codec import (
    CURRENT_VERSION,
    BlobFormatError,
    decode_hives,
    decode_inspections,
    encode,
)


class TestRoundTrip:
    def test_hives(self):
        hives = [
            make_hive("a", origin="Resgate", location="Na Mata", genetics=HiveGenetics.PROPOLIS),
            make_hive("b", last_intervention_date="2024-03-01", box_type="AF"),
        ]
        assert decode_hives(encode(hives)) == hives

    def test_inspections(self):
        inspections = [
            make_inspection(
                "i1",
                notes="linha 1\nlinha 2",
                details=InspectionDetails(populacao="B", fornecido=["X", "P"], fase_postura=["1/2M"]),
                next_action_date="2024-07-01",
            ),
            make_inspection("i2", hive_id="gone"),
        ]
        assert decode_inspections(encode(inspections)) == inspections

    def test_encoded_layout(self):
        payload = json.loads(encode([make_hive("a")]))
        assert payload["version"] == CURRENT_VERSION
        record = payload["records"][0]
        assert record["dateEstablished"] == "2024-01-10"
        assert record["boxType"] == "INPA"
        assert record["species"] == "Jataí"


class TestLegacyUpgrade:
    def test_bare_array_gets_migration_defaults(self):
        legacy = [
            {
                "id": "1",
                "name": "CX-01",
                "species": "Jataí",
                "dateEstablished": "2023-01-15",
                "health": "Forte",
                "location": "Varanda",
                "boxType": "AF",
                "queenStatus": "Presente",
                "lastInterventionDateDiscos": "2023-11-20",
            },
            {
                "id": "2",
                "name": "CX-02",
                "species": "Uruçu",
                "dateEstablished": "2023-06-20",
                "health": "Média",
                "location": "",
                "boxType": "INPA",
            },
        ]
        hives = decode_hives(json.dumps(legacy))

        assert hives[0].classification == HiveClassification.MATRIZ
        assert hives[0].last_intervention_date == "2023-11-20"
        assert hives[0].genetics == HiveGenetics.MIXED
        assert hives[1].classification == HiveClassification.FILHA
        assert hives[1].last_intervention_date == ""

    def test_existing_fields_are_kept(self):
        legacy = [{
            "id": "1",
            "name": "CX-01",
            "species": "Jataí",
            "dateEstablished": "2023-01-15",
            "lastInterventionDate": "2024-02-02",
            "lastInterventionDateDiscos": "2023-11-20",
            "health": "Forte",
            "location": "",
            "boxType": "AF",
            "genetics": "Mel",
            "classification": "Resgate",
        }]
        hive = decode_hives(json.dumps(legacy))[0]
        assert hive.last_intervention_date == "2024-02-02"
        assert hive.genetics == HiveGenetics.HONEY
        assert hive.classification == HiveClassification.RESGATE

    def test_legacy_single_string_multi_select(self):
        legacy = [{
            "id": "i1",
            "hiveId": "1",
            "date": "2023-11-20",
            "type": "Divisão",
            "notes": "",
            "details": {"fasePostura": "SV", "fornecido": ["X", "X"]},
        }]
        inspection = decode_inspections(json.dumps(legacy))[0]
        assert inspection.details.fase_postura == ["SV"]
        assert inspection.details.fornecido == ["X"]


class TestFailures:
    def test_invalid_json(self):
        with pytest.raises(BlobFormatError):
            decode_hives("{not json")

    def test_future_version(self):
        with pytest.raises(BlobFormatError):
            decode_hives(json.dumps({"version": CURRENT_VERSION + 1, "records": []}))

    def test_invalid_record_is_skipped(self):
        good = make_hive("a")
        payload = json.loads(encode([good]))
        payload["records"].append({"id": "b", "name": "", "species": "Abelha X"})
        assert decode_hives(json.dumps(payload)) == [good]

    def test_unknown_detail_code_is_rejected(self):
        payload = {"version": CURRENT_VERSION, "records": [{
            "id": "i1", "hiveId": "1", "date": "2024-01-01", "type": "Limpeza",
            "details": {"populacao": "Z"},
        }]}
        assert decode_inspections(json.dumps(payload)) == []

    def test_non_list_multi_select_skips_record(self):
        good = make_inspection("i2", details=InspectionDetails(fornecido=["X", "P"]))
        payload = json.loads(encode([good]))
        payload["records"].insert(0, {
            "id": "i1", "hiveId": "1", "date": "2024-01-01", "type": "Limpeza",
            "details": {"fornecido": 5},
        })
        assert decode_inspections(json.dumps(payload)) == [good]

    def test_non_object_records_are_skipped(self, caplog):
        text = json.dumps([5, "x", None, {"id": "a", "name": "CX-01", "species": "Jataí"}])
        with caplog.at_level("WARNING", logger="melipro.services.storage.codec"):
            hives = decode_hives(text)
        assert [h.id for h in hives] == ["a"]
        assert "skipping non-object record: 5" in caplog.text
