import pytest
import frontend.web as webmod
from frontend.web import app as flask_app

@pytest.mark.e2e
def test_frontend_health_counts_tabs():
    webmod._sessions.clear()
    client = flask_app.test_client()
    assert client.get("/health").get_json() == {"ok": True, "tabs": 0}
    client.post("/api/tabs/t1/document", json={"text": "", "cursor": 0})
    assert client.get("/health").get_json()["tabs"] == 1
    assert client.delete("/api/tabs/t1").status_code == 200
    assert client.delete("/api/tabs/t1").status_code == 404
    webmod._sessions.clear()
