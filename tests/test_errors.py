from app import create_app
from app.store import JsonFileRepository


class ExplodingRepository(JsonFileRepository):
    def list(self, collection):
        raise RuntimeError("store is on fire")


def test_unmatched_route_is_json_404(json_client):
    r = json_client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.get_json() == {"error": "Route not found"}


def test_wrong_method_is_json_405(json_client):
    r = json_client.patch("/api/vehicles")
    assert r.status_code == 405
    assert r.get_json() == {"error": "Method not allowed"}


def test_store_failure_is_500_with_raw_message():
    client = create_app(repository=ExplodingRepository(data={})).test_client()
    r = client.get("/api/vehicles")
    assert r.status_code == 500
    assert r.get_json() == {"error": "store is on fire"}


def test_invalid_json_body_is_validation_error(json_client):
    r = json_client.post("/api/vehicles", data="not json", content_type="application/json")
    assert r.status_code == 400
    assert "make" in r.get_json()["errors"]


def test_swagger_and_root(json_client):
    spec = json_client.get("/swagger.json").get_json()
    assert spec["info"]["title"] == "Repair Shop API"
    assert "/api/slotAttente/assign" in spec["paths"]
    r = json_client.get("/")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/docs")
