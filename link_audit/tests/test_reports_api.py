"""
Report API Contract Test Module

Exercises the FastAPI application through TestClient with the report store
pointed at a temporary directory.

Covers:
- GET /api/reports/{locale}: stored report verbatim, 404 and corrupt handling
- GET /api/reports: cross-locale summary, empty summary
- GET /api/reports/compare/{locales}: partial matches silently omitted
- GET /api/reports/{locale}/insights: rule-based insight on demand
- GET /health, unmatched routes and unhandled errors
"""

from pathlib import Path

from link_audit.tests.conftest import make_report


class TestGetReport:

    def test_returns_stored_report(self, api_client, report_store, sample_report) -> None:
        report_store.save(sample_report)

        response = api_client.get("/api/reports/en-IN")

        assert response.status_code == 200
        assert response.json() == sample_report.model_dump(mode="json")

    def test_missing_locale_is_404(self, api_client) -> None:
        response = api_client.get("/api/reports/xx-XX")

        assert response.status_code == 404
        assert response.json() == {"error": "No report found for locale: xx-XX"}

    def test_corrupt_report_is_500_and_others_still_served(self, api_client, report_store) -> None:
        report_store.save(make_report(locale="en-IN"))
        (report_store.reports_dir / "fr-FR.json").write_text("{oops", encoding="utf-8")

        corrupt = api_client.get("/api/reports/fr-FR")
        healthy = api_client.get("/api/reports/en-IN")

        assert corrupt.status_code == 500
        assert corrupt.json() == {"error": "Failed to read report"}
        assert healthy.status_code == 200


class TestSummary:

    def test_empty_store(self, api_client) -> None:
        response = api_client.get("/api/reports")

        assert response.status_code == 200
        assert response.json() == {
            "totalLocales": 0,
            "locales": [],
            "totalBrokenLinks": 0,
            "totalSuccessful": 0,
            "averageSuccessRate": 0,
        }

    def test_aggregates_every_locale(self, api_client, report_store) -> None:
        report_store.save(make_report(locale="en-IN", total_links=10, success_count=9))
        report_store.save(make_report(locale="fr-FR", total_links=4, success_count=2))

        body = api_client.get("/api/reports").json()

        assert body["totalLocales"] == 2
        assert body["totalBrokenLinks"] == 3
        assert body["totalSuccessful"] == 11
        assert body["averageSuccessRate"] == "70.00"
        rows = {row["locale"]: row for row in body["locales"]}
        assert rows["en-IN"] == {"locale": "en-IN", "successRate": "90.00", "brokenLinks": 1, "successCount": 9}
        assert rows["fr-FR"]["successRate"] == "50.00"

    def test_zero_link_report_rate(self, api_client, report_store) -> None:
        report_store.save(make_report(locale="en-IN", total_links=0, success_count=0))

        body = api_client.get("/api/reports").json()

        assert body["locales"][0]["successRate"] == "0.00"
        assert body["averageSuccessRate"] == "0.00"

    def test_corrupt_file_is_left_out(self, api_client, report_store) -> None:
        report_store.save(make_report(locale="en-IN"))
        (report_store.reports_dir / "fr-FR.json").write_text("not json", encoding="utf-8")

        body = api_client.get("/api/reports").json()

        assert body["totalLocales"] == 1
        assert [row["locale"] for row in body["locales"]] == ["en-IN"]

    def test_invalid_utf8_file_is_left_out(self, api_client, report_store) -> None:
        report_store.save(make_report(locale="en-IN"))
        (report_store.reports_dir / "fr-FR.json").write_bytes(b"\xff\xfe{garbage")

        response = api_client.get("/api/reports")

        assert response.status_code == 200
        assert [row["locale"] for row in response.json()["locales"]] == ["en-IN"]

    def test_unreadable_file_is_left_out(self, api_client, report_store, monkeypatch) -> None:
        report_store.save(make_report(locale="en-IN"))
        report_store.save(make_report(locale="fr-FR"))
        original_read_bytes = Path.read_bytes

        def refuse_fr(self):
            if self.name == "fr-FR.json":
                raise PermissionError(13, "Permission denied")
            return original_read_bytes(self)

        monkeypatch.setattr(Path, "read_bytes", refuse_fr)

        body = api_client.get("/api/reports").json()

        assert body["totalLocales"] == 1
        assert [row["locale"] for row in body["locales"]] == ["en-IN"]

    def test_unlistable_directory_is_empty_summary(self, api_client, report_store, monkeypatch) -> None:
        report_store.save(make_report(locale="en-IN"))

        def refuse_listing():
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(report_store, "list_sorted", refuse_listing)

        body = api_client.get("/api/reports").json()

        assert body["totalLocales"] == 0
        assert body["averageSuccessRate"] == 0


class TestCompare:

    def test_partial_match_omits_missing_locales(self, api_client, report_store) -> None:
        en_report = make_report(locale="en-IN")
        report_store.save(en_report)

        response = api_client.get("/api/reports/compare/en-IN,fr-FR")

        assert response.status_code == 200
        assert response.json() == {
            "localesCompared": ["en-IN", "fr-FR"],
            "reports": [en_report.model_dump(mode="json")],
        }

    def test_whitespace_is_trimmed(self, api_client, report_store) -> None:
        report_store.save(make_report(locale="en-IN"))
        report_store.save(make_report(locale="fr-FR"))

        body = api_client.get("/api/reports/compare/fr-FR, en-IN").json()

        assert body["localesCompared"] == ["fr-FR", "en-IN"]
        assert [report["locale"] for report in body["reports"]] == ["fr-FR", "en-IN"]

    def test_invalid_utf8_locale_is_omitted(self, api_client, report_store) -> None:
        en_report = make_report(locale="en-IN")
        report_store.save(en_report)
        (report_store.reports_dir / "fr-FR.json").write_bytes(b"\xff\xfe{garbage")

        response = api_client.get("/api/reports/compare/en-IN,fr-FR")

        assert response.status_code == 200
        assert response.json()["reports"] == [en_report.model_dump(mode="json")]

    def test_no_matches(self, api_client) -> None:
        body = api_client.get("/api/reports/compare/de-DE").json()

        assert body == {"localesCompared": ["de-DE"], "reports": []}


class TestInsightsEndpoint:

    def test_rule_based_insight(self, api_client, report_store) -> None:
        report_store.save(make_report(locale="fr-FR", total_links=10, success_count=9))

        response = api_client.get("/api/reports/fr-FR/insights")

        assert response.status_code == 200
        body = response.json()
        assert body["locale"] == "fr-FR"
        assert body["insights"]["severity"] == "Medium"
        assert body["insights"]["source"] == "rules"
        assert "1 broken links" in body["insights"]["summary"]
        assert "90.00% success rate" in body["insights"]["summary"]

    def test_ninety_five_percent_is_low(self, api_client, report_store) -> None:
        report_store.save(make_report(locale="fr-FR", total_links=20, success_count=19))

        body = api_client.get("/api/reports/fr-FR/insights").json()

        assert body["insights"]["severity"] == "Low"

    def test_missing_locale_is_404(self, api_client) -> None:
        response = api_client.get("/api/reports/xx-XX/insights")

        assert response.status_code == 404


class TestApplication:

    def test_health(self, api_client) -> None:
        body = api_client.get("/health").json()

        assert body["status"]
        assert body["timestamp"].endswith("Z")

    def test_unmatched_route(self, api_client) -> None:
        response = api_client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}

    def test_unhandled_error_is_generic_500(self, api_client) -> None:
        from link_audit.core.dependencies import get_report_store
        from link_audit.main import app

        class ExplodingStore:
            def load(self, locale):
                raise ZeroDivisionError("boom")

        app.dependency_overrides[get_report_store] = lambda: ExplodingStore()

        response = api_client.get("/api/reports/en-IN")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_dashboard_is_served(self, api_client) -> None:
        index = api_client.get("/")
        script = api_client.get("/dashboard/script.js")

        assert index.status_code == 200
        assert "Link Validation Dashboard" in index.text
        assert script.status_code == 200
