"""Integration tests for the schools API using FastAPI TestClient."""

from __future__ import annotations

from fastapi.testclient import TestClient

# ---------------------------------------------------------------------------
# GET /api/schools
# ---------------------------------------------------------------------------


class TestSchoolsListEndpoint:
    """Tests for the paginated school list."""

    def test_returns_page_envelope(self, test_client: TestClient):
        response = test_client.get("/api/schools")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 5
        assert data["page"] == 1
        assert data["page_size"] == 25
        assert data["total_pages"] == 1
        assert len(data["data"]) == 5

    def test_sorted_by_name(self, test_client: TestClient):
        data = test_client.get("/api/schools").json()["data"]
        names = [row["school"]["name"] for row in data]
        assert names == sorted(names)

    def test_rows_include_readiness(self, test_client: TestClient):
        data = test_client.get("/api/schools").json()["data"]
        kps = next(row for row in data if row["school"]["id"] == "SCH1")

        assert kps["readiness"] == {"level": "High", "score": 63}
        assert kps["region"] == "Central"
        assert kps["last_report_date"] == "2024-06-10T10:00:00Z"
        assert kps["school"]["head_teacher_name"] == "Grace Nakato"

    def test_filter_by_readiness_level(self, test_client: TestClient):
        data = test_client.get("/api/schools", params={"readiness_level": "Medium"}).json()
        assert [row["school"]["id"] for row in data["data"]] == ["SCH3"]

    def test_filter_by_region_and_search(self, test_client: TestClient):
        data = test_client.get("/api/schools", params={"region": "Northern", "search": "kitgum"}).json()
        assert [row["school"]["id"] for row in data["data"]] == ["SCH5"]

    def test_filter_by_date_window(self, test_client: TestClient):
        params = {"date_from": "2024-03-01", "date_to": "2024-05-31"}
        data = test_client.get("/api/schools", params=params).json()
        assert sorted(row["school"]["id"] for row in data["data"]) == ["SCH3", "SCH5"]

    def test_pagination(self, test_client: TestClient):
        data = test_client.get("/api/schools", params={"page": 2, "page_size": 2}).json()

        assert data["total"] == 5
        assert data["total_pages"] == 3
        assert [row["school"]["name"] for row in data["data"]] == [
            "Kampala Parents School",
            "Kitgum Community School",
        ]

    def test_invalid_page_rejected(self, test_client: TestClient):
        assert test_client.get("/api/schools", params={"page": 0}).status_code == 422

    def test_invalid_readiness_level_rejected(self, test_client: TestClient):
        assert test_client.get("/api/schools", params={"readiness_level": "Excellent"}).status_code == 422


# ---------------------------------------------------------------------------
# GET /api/schools/{id}
# ---------------------------------------------------------------------------


class TestSchoolDetailEndpoint:
    def test_detail(self, test_client: TestClient):
        response = test_client.get("/api/schools/SCH1")
        assert response.status_code == 200
        data = response.json()

        assert data["school"]["name"] == "Kampala Parents School"
        assert data["readiness"] == {"level": "High", "score": 63}
        assert data["report_count"] == 2
        assert data["latest_report"]["id"] == "RPT2"
        assert data["latest_summary"]["teacher_usage_percent"] == 90
        assert data["latest_summary"]["has_internet"] is True

    def test_school_without_reports(self, test_client: TestClient):
        data = test_client.get("/api/schools/SCH4").json()

        assert data["readiness"] == {"level": "Low", "score": 0}
        assert data["latest_report"] is None
        assert data["latest_summary"] is None
        assert data["report_count"] == 0

    def test_not_found(self, test_client: TestClient):
        assert test_client.get("/api/schools/NOPE").status_code == 404


# ---------------------------------------------------------------------------
# POST / PUT / DELETE /api/schools
# ---------------------------------------------------------------------------


class TestSchoolWrites:
    def test_create_accepts_camel_case(self, test_client: TestClient):
        payload = {
            "name": "Lira Town College",
            "district": "Lira",
            "subCounty": "Adyel",
            "environment": "Urban",
            "totalStudents": 640,
            "headTeacherName": "Akello Sarah",
        }

        response = test_client.post("/api/schools", json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("SCH")
        assert data["sub_county"] == "Adyel"
        assert data["total_students"] == 640

        listed = test_client.get("/api/schools", params={"search": "akello"}).json()
        assert listed["total"] == 1
        assert listed["data"][0]["region"] == "Northern"

    def test_create_requires_name(self, test_client: TestClient):
        assert test_client.post("/api/schools", json={"district": "Lira"}).status_code == 422

    def test_update(self, test_client: TestClient):
        payload = {"name": "Jinja College", "district": "Jinja", "environment": "Urban", "total_students": 1000}

        response = test_client.put("/api/schools/SCH4", json=payload)

        assert response.status_code == 200
        assert response.json()["total_students"] == 1000

    def test_update_not_found(self, test_client: TestClient):
        assert test_client.put("/api/schools/NOPE", json={"name": "X"}).status_code == 404

    def test_delete_cascades(self, test_client: TestClient):
        assert test_client.delete("/api/schools/SCH1").status_code == 204

        assert test_client.get("/api/schools/SCH1").status_code == 404
        assert test_client.get("/api/reports/RPT1").status_code == 404

    def test_delete_not_found(self, test_client: TestClient):
        assert test_client.delete("/api/schools/NOPE").status_code == 404


# ---------------------------------------------------------------------------
# GET /api/schools/{id}/reports and /trend
# ---------------------------------------------------------------------------


class TestSchoolReportsEndpoint:
    def test_newest_first(self, test_client: TestClient):
        data = test_client.get("/api/schools/SCH1/reports").json()
        assert [r["id"] for r in data] == ["RPT2", "RPT1"]

    def test_period_filter(self, test_client: TestClient):
        data = test_client.get("/api/schools/SCH1/reports", params={"period": "Term 1 2023"}).json()
        assert [r["id"] for r in data] == ["RPT1"]

    def test_unknown_school(self, test_client: TestClient):
        assert test_client.get("/api/schools/NOPE/reports").status_code == 404


class TestSchoolTrendEndpoint:
    def test_trend(self, test_client: TestClient):
        response = test_client.get("/api/schools/SCH1/trend")
        assert response.status_code == 200
        data = response.json()

        assert data["school_id"] == "SCH1"
        assert [p["period"] for p in data["series"]] == ["Term 1 2023", "Term 2 2024"]
        assert [p["readiness_score"] for p in data["series"]] == [36, 63]
        assert data["deltas"]["readiness_growth"] == 27
        assert data["deltas"]["device_growth"] == 55
        assert data["deltas"]["teacher_usage_growth"] == 40
        assert data["deltas"]["literacy_growth"] == 35

    def test_single_report_has_null_deltas(self, test_client: TestClient):
        data = test_client.get("/api/schools/SCH2/trend").json()

        assert len(data["series"]) == 1
        assert data["deltas"] is None

    def test_no_reports(self, test_client: TestClient):
        data = test_client.get("/api/schools/SCH4/trend").json()
        assert data["series"] == []
        assert data["deltas"] is None

    def test_unknown_school(self, test_client: TestClient):
        assert test_client.get("/api/schools/NOPE/trend").status_code == 404
