def test_repair_pool_assign_until_full(empty_firestore_client):
    c = empty_firestore_client
    r1 = c.post("/api/slotReparation/assign", json={"repair_id": "REP001"})
    r2 = c.post("/api/slotReparation/assign", json={"repair_id": "REP002"})
    assert r1.status_code == 200 and r1.get_json()["slot_id"] == "1"
    assert r2.status_code == 200 and r2.get_json()["slot_number"] == 2

    r3 = c.post("/api/slotReparation/assign", json={"repair_id": "REP003"})
    assert r3.status_code == 400
    assert r3.get_json() == {"error": "All repair slots are already occupied"}


def test_waiting_pool_post_claims_positions(empty_firestore_client):
    c = empty_firestore_client
    body = {"repair_id": "REP001", "start_time": "2024-05-01T08:00:00"}
    r1 = c.post("/api/slotAttente", json=body)
    assert r1.status_code == 201
    assert r1.get_json()["id"] == "1"

    c.post("/api/slotAttente", json={**body, "repair_id": "REP002"})
    r3 = c.post("/api/slotAttente", json={**body, "repair_id": "REP003"})
    assert r3.status_code == 409
    assert "error" in r3.get_json()

    slot = c.get("/api/slotAttente/1").get_json()
    assert slot["repair_id"] == "REP001"
    assert slot["start_time"].startswith("2024-05-01T08:00:00")


def test_repair_pool_post_adds_free_standing_slot(empty_firestore_client):
    c = empty_firestore_client
    r = c.post("/api/slotReparation", json={"repair_id": "REP001", "start_time": "2024-05-01T08:00:00"})
    assert r.status_code == 201
    slot_id = r.get_json()["id"]
    assert slot_id not in ("1", "2")
    # canonical slots are still free
    assert c.post("/api/slotReparation/assign", json={"repair_id": "REP002"}).get_json()["slot_id"] == "1"
    assert len(c.get("/api/slotReparation").get_json()) == 2


def test_release_then_reassign_lowest(empty_firestore_client):
    c = empty_firestore_client
    for ref in ("REP001", "REP002"):
        c.post("/api/slotReparation/assign", json={"repair_id": ref})
    assert c.delete("/api/slotReparation/1").status_code == 200
    r = c.post("/api/slotReparation/assign", json={"repair_id": "REP003"})
    assert r.get_json()["slot_id"] == "1"


def test_reset_reports_count_and_empties_pool(empty_firestore_client):
    c = empty_firestore_client
    c.post("/api/slotAttente/assign", json={"repair_id": "REP001"})
    c.post("/api/slotAttente/assign", json={"repair_id": "REP002"})
    r = c.get("/api/slotAttente/reset")
    assert r.status_code == 200
    assert r.get_json()["deleted"] == 2
    assert c.get("/api/slotAttente").get_json() == []

    r = c.get("/api/slotReparation/reset")
    assert r.get_json()["deleted"] == 0


def test_get_missing_slot_is_404(empty_firestore_client):
    r = empty_firestore_client.get("/api/slotReparation/2")
    assert r.status_code == 404
    assert r.get_json() == {"error": "Slot not found"}


def test_assign_requires_repair_id(empty_firestore_client):
    r = empty_firestore_client.post("/api/slotReparation/assign", json={})
    assert r.status_code == 400
    assert "repair_id" in r.get_json()["error"]


def test_waiting_post_requires_start_time(empty_firestore_client):
    r = empty_firestore_client.post("/api/slotAttente", json={"repair_id": "REP001"})
    assert r.status_code == 400
    assert "start_time" in r.get_json()["errors"]


def test_slots_in_fallback_mode(json_client):
    assert json_client.get("/api/slotReparation").get_json() == []
    assert json_client.get("/api/slotAttente").get_json() == []

    r = json_client.post("/api/slotReparation/assign", json={"repair_id": "REP001"})
    assert r.status_code == 400
    assert r.get_json() == {"error": "Document store unavailable"}

    assert json_client.get("/api/slotAttente/1").status_code == 400
    assert json_client.delete("/api/slotAttente/1").status_code == 400

    r = json_client.get("/api/slotAttente/reset")
    assert r.status_code == 200
    assert r.get_json()["deleted"] == 0
    assert r.get_json()["mode"] == "json"


def test_metadata_document_is_not_a_slot(firestore_app, fake_firestore):
    firestore_app.extensions["slot_managers"]["repair"].write_metadata()
    c = firestore_app.test_client()

    r = c.get("/api/slotReparation/_metadata")
    assert r.status_code == 404
    assert r.get_json() == {"error": "Slot not found"}

    assert c.delete("/api/slotReparation/_metadata").status_code == 404
    assert "_metadata" in fake_firestore.raw("slotReparation")
