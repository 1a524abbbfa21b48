import pytest
from frontend.web import app as flask_app

@pytest.mark.e2e
def test_frontend_complete_api_json():
    client = flask_app.test_client()
    rv = client.get("/api/complete", query_string={"q": "pl", "text": "local player = 1\n"})
    assert rv.status_code == 200
    data = rv.get_json()
    assert data == [{"text": "player", "category": "variable", "description": "user defined variable"}]

@pytest.mark.e2e
def test_frontend_complete_empty_query():
    client = flask_app.test_client()
    assert client.get("/api/complete?q=").get_json() == []

@pytest.mark.e2e
def test_frontend_catalog_lists_entries():
    client = flask_app.test_client()
    data = client.get("/api/catalog").get_json()
    assert data[0]["text"] == "local"
    assert {"text", "category", "description"} <= set(data[0])
