from __future__ import annotations

from birthday_mailer.web import create_app


def test_check_now_triggers_and_acknowledges() -> None:
    triggered: list[bool] = []
    app = create_app(trigger_check=lambda: triggered.append(True), count_records=lambda: 3)

    response = app.test_client().get("/check-now")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Manual check triggered"
    assert triggered == [True]


def test_other_paths_report_record_count() -> None:
    triggered: list[bool] = []
    app = create_app(trigger_check=lambda: triggered.append(True), count_records=lambda: 3)
    client = app.test_client()

    for path in ("/", "/status", "/some/nested/path"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.get_data(as_text=True) == "Birthday Bot Active. Loaded 3 friends."

    assert triggered == []
