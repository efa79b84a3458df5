"""Tests for the valuation API router."""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from predial.web.app import create_app


SELECTIONS = {"MUROS_Y_COLUMNAS": "A", "TECHOS": "A", "BANOS": None}


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings=settings, store=store))


class TestDepreciationEndpoint:
    def test_lookup(self, client):
        resp = client.get("/api/depreciation/2025/CONCRETO/HASTA_10/REGULAR")
        assert resp.status_code == 200
        assert Decimal(resp.json()["depreciation_pct"]) == Decimal("30")

    def test_lookup_miss(self, client):
        resp = client.get("/api/depreciation/2025/CONCRETO/HASTA_5/MUY_BUENO")
        assert resp.status_code == 404
        assert "Hasta 5 años" in resp.json()["detail"]

    def test_malformed_enum(self, client):
        resp = client.get("/api/depreciation/2025/concreto/HASTA_10/REGULAR")
        assert resp.status_code == 400


class TestUnitValueEndpoint:
    def test_compose(self, client):
        resp = client.post("/api/valuation/unit-value", json={
            "year": 2025, "selections": SELECTIONS,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["total_cost"]) == Decimal("150")
        assert [c["subcategory"] for c in data["components"]] == ["MUROS_Y_COLUMNAS", "TECHOS"]

    def test_missing_entry(self, client):
        resp = client.post("/api/valuation/unit-value", json={
            "year": 2025, "selections": {"PISOS": "A"},
        })
        assert resp.status_code == 404
        assert "PISOS" in resp.json()["detail"]

    def test_reflects_published_change(self, client):
        resp = client.put("/api/rates/unit-values", json=[
            {"year": 2025, "subcategory": "TECHOS", "letter": "A", "cost": "80"},
        ])
        assert resp.json() == {"published": 1}
        resp = client.post("/api/valuation/unit-value", json={
            "year": 2025, "selections": SELECTIONS,
        })
        assert Decimal(resp.json()["total_cost"]) == Decimal("180")


class TestAssessedValueEndpoint:
    def _body(self, **overrides):
        body = {
            "year": 2025,
            "selections": SELECTIONS,
            "material": "CONCRETO",
            "age_bracket": "HASTA_10",
            "conservation_state": "BUENO",
            "built_area_m2": 80,
        }
        body.update(overrides)
        return body

    def test_pipeline_example(self, client):
        resp = client.post("/api/valuation/assessed-value", json=self._body())
        assert resp.status_code == 200
        data = resp.json()
        assert data["assessed_value"] == "10080.00"
        assert Decimal(data["incremented_unit_cost"]) == Decimal("157.5")
        assert Decimal(data["depreciated_unit_cost"]) == Decimal("126")

    def test_increment_override(self, client):
        resp = client.post("/api/valuation/assessed-value", json=self._body(increment_pct=0))
        assert resp.json()["assessed_value"] == "9600.00"

    def test_zero_area(self, client):
        resp = client.post("/api/valuation/assessed-value", json=self._body(built_area_m2=0))
        assert resp.status_code == 400

    def test_missing_depreciation(self, client):
        resp = client.post("/api/valuation/assessed-value", json=self._body(material="ADOBE"))
        assert resp.status_code == 404


class TestPropertyEndpoint:
    def test_assess_property_with_tax(self, client):
        floor = {
            "description": "Primer piso",
            "selections": SELECTIONS,
            "material": "CONCRETO",
            "age_bracket": "HASTA_10",
            "conservation_state": "BUENO",
            "built_area_m2": 80,
        }
        resp = client.post("/api/valuation/property", json={
            "year": 2025, "floors": [floor, {**floor, "description": "Segundo piso"}],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["total_assessed_value"]) == Decimal("20160")
        assert [f["item"] for f in data["floors"]] == [1, 2]
        # 20160 * 0.20
        assert data["tax"]["total_tax"] == "4032.00"

    def test_invalid_floor(self, client):
        resp = client.post("/api/valuation/property", json={
            "year": 2025,
            "floors": [{
                "selections": SELECTIONS,
                "material": "MADERA",
                "age_bracket": "HASTA_10",
                "conservation_state": "BUENO",
                "built_area_m2": 80,
            }],
        })
        assert resp.status_code == 422

    def test_no_floors(self, client):
        resp = client.post("/api/valuation/property", json={"year": 2025, "floors": []})
        assert resp.status_code == 400


class TestPublishValuationRows:
    def test_inverted_depreciation_row_rejected(self, client):
        resp = client.put("/api/rates/depreciation", json={
            "year": 2025, "material": "ADOBE", "age_bracket": "MAS_50",
            "pct_muy_bueno": "50", "pct_bueno": "40",
            "pct_regular": "60", "pct_malo": "90",
        })
        assert resp.status_code == 409

    def test_depreciation_year_out_of_range(self, client):
        resp = client.put("/api/rates/depreciation", json={
            "year": 5, "material": "ADOBE", "age_bracket": "MAS_50",
            "pct_muy_bueno": "10", "pct_bueno": "20",
            "pct_regular": "30", "pct_malo": "60",
        })
        assert resp.status_code == 400

    def test_unit_value_batch_with_bad_year_publishes_nothing(self, client):
        resp = client.put("/api/rates/unit-values", json=[
            {"year": 2025, "subcategory": "PISOS", "letter": "A", "cost": "40"},
            {"year": 1900, "subcategory": "PISOS", "letter": "B", "cost": "30"},
        ])
        assert resp.status_code == 400
        listed = client.get("/api/rates/unit-values/2025").json()
        assert "PISOS" not in [e["subcategory"] for e in listed]
