"""
tests/test_site_upload_api.py

HTTP tests for the site upload router. The database-backed store is replaced
through dependency overrides, so no database is needed.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_site_store
from app.main import create_app
from tests.site_factories import UPLOADER_ID, FakeSiteStore, valid_csv


@pytest.fixture()
def client(store: FakeSiteStore):
    application = create_app(check_database=False)
    application.dependency_overrides[get_site_store] = lambda: store
    with TestClient(application) as test_client:
        yield test_client
    application.dependency_overrides.clear()


def _csv_file(text: str, *, name: str = "sites.csv", content_type: str = "text/csv"):
    return {"file": (name, text.encode("utf-8"), content_type)}


class TestTemplate:
    def test_download_template(self, client: TestClient) -> None:
        response = client.get("/sites/template")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "gis_sites_template.csv" in response.headers["content-disposition"]
        assert response.text.startswith("site_name,latitude,longitude,risk_status")


class TestValidate:
    def test_reports_counts_and_findings(self, client: TestClient) -> None:
        response = client.post(
            "/sites/validate",
            files=_csv_file("site_name,latitude,longitude\nA,91,10\nB,45,45"),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is False
        assert body["row_count"] == 2
        assert body["valid_row_count"] == 1
        assert body["error_count"] == 1
        assert body["errors"][0]["row_number"] == 2
        assert body["errors"][0]["field"] == "latitude"
        assert body["error_lines"] == ["Row 2: Invalid latitude (91)"]

    def test_rejects_non_csv(self, client: TestClient) -> None:
        response = client.post(
            "/sites/validate",
            files=_csv_file("{}", name="sites.json", content_type="application/json"),
        )

        assert response.status_code == 415

    def test_malformed_csv_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/sites/validate", files=_csv_file('site_name\n"oops'))

        assert response.status_code == 400
        assert "Invalid CSV format" in response.json()["detail"]["message"]


class TestUpload:
    def test_ingests_valid_file(self, client: TestClient, store: FakeSiteStore) -> None:
        response = client.post(
            "/sites/upload",
            params={"uploaded_by": str(UPLOADER_ID)},
            files=_csv_file(valid_csv(60)),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Successfully uploaded 60 sites"
        assert body["records_committed"] == 60
        assert [o["progress_percent"] for o in body["outcomes"]] == [83.3, 100.0]
        assert len(store.records) == 60

    def test_requires_uploader_identity(self, client: TestClient) -> None:
        response = client.post("/sites/upload", files=_csv_file(valid_csv(1)))

        assert response.status_code == 422

    def test_invalid_file_is_not_ingested(self, client: TestClient, store: FakeSiteStore) -> None:
        response = client.post(
            "/sites/upload",
            params={"uploaded_by": str(UPLOADER_ID)},
            files=_csv_file("site_name,latitude,longitude\nA,91,10\n"),
        )

        assert response.status_code == 400
        assert response.json()["detail"]["report"]["error_count"] == 1
        assert store.calls == 0

    def test_missing_columns_are_listed(self, client: TestClient) -> None:
        response = client.post(
            "/sites/upload",
            params={"uploaded_by": str(UPLOADER_ID)},
            files=_csv_file("site_name\nA\n"),
        )

        assert response.status_code == 400
        assert response.json()["detail"]["missing_columns"] == ["latitude", "longitude"]

    def test_store_failure_returns_partial_progress(self, client: TestClient) -> None:
        client.app.dependency_overrides[get_site_store] = lambda: FakeSiteStore(fail_on=1)

        response = client.post(
            "/sites/upload",
            params={"uploaded_by": str(UPLOADER_ID)},
            files=_csv_file(valid_csv(120)),
        )

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["batch_index"] == 1
        assert detail["records_committed"] == 50


class TestStartupCheck:
    @pytest.fixture()
    def engine(self, monkeypatch: pytest.MonkeyPatch):
        from sqlalchemy import create_engine

        import db.session

        engine = create_engine("sqlite://")
        monkeypatch.setattr(db.session, "get_engine", lambda: engine)
        yield engine
        engine.dispose()

    def test_missing_table_fails_startup(self, engine) -> None:
        from app.main import _check_site_store

        with pytest.raises(RuntimeError, match="gis_sites"):
            _check_site_store()

    def test_migrated_store_passes(self, engine) -> None:
        from sqlalchemy import text

        from app.main import _check_site_store

        with engine.begin() as connection:
            connection.execute(text("CREATE TABLE gis_sites (id INTEGER PRIMARY KEY)"))

        _check_site_store()
