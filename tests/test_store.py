import json
import threading

import pytest

import app.store as store
from app.slots import SlotManager, repair_pool, waiting_pool
from app.store import FirestoreRepository, JsonFileRepository, build_repository, load_firebase_credentials
from app.store.base import format_sequential_id, max_suffix
from tests.fakes import FakeFirestoreClient


def test_max_suffix_ignores_other_prefixes():
    ids = ["PRT001", "PRT010", "PTY099", "PRTX", "xPRT500", "PRT007"]
    assert max_suffix(ids, "PRT") == 10
    assert max_suffix([], "PRT") == 0
    assert format_sequential_id("REP", 7) == "REP007"
    assert format_sequential_id("REP", 1234) == "REP1234"


class TestJsonFileRepository:
    def test_missing_file_gives_empty_dataset(self, tmp_path):
        repo = JsonFileRepository(str(tmp_path / "nope.json"))
        assert repo.list("vehicles") == []
        assert repo.counts()["repairs"] == 0

    def test_corrupt_file_gives_empty_dataset(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonFileRepository(str(path)).list("clients") == []

    def test_reads_are_copies(self, seed_file):
        repo = JsonFileRepository(str(seed_file))
        doc = repo.get("vehicles", "V1")
        doc["make"] = "changed"
        repo.list("vehicles")[0]["model"] = "changed"
        assert repo.get("vehicles", "V1")["make"] == "Peugeot"
        assert repo.get("vehicles", "V1")["model"] == "208"

    def test_mutations_rewrite_whole_file(self, seed_file):
        repo = JsonFileRepository(str(seed_file))
        repo.set("owners", "O2", {"first_name": "Lee", "last_name": "Park"})
        repo.update("owners", "O1", {"phone": "555"})
        on_disk = json.loads(seed_file.read_text(encoding="utf-8"))
        assert {o["id"] for o in on_disk["owners"]} == {"O1", "O2"}
        assert on_disk["owners"][0]["phone"] == "555"
        # untouched collections are written back as well
        assert len(on_disk["repairs"]) == 3

    def test_set_merge_and_replace(self):
        repo = JsonFileRepository(data={})
        repo.set("parts", "P1", {"name": "a", "price": 1})
        assert repo.set("parts", "P1", {"price": 2}, merge=True) == {"id": "P1", "name": "a", "price": 2}
        assert repo.set("parts", "P1", {"price": 3}) == {"id": "P1", "price": 3}

    def test_filter_on_nested_path_and_bool(self, seed_file):
        repo = JsonFileRepository(str(seed_file))
        assert {r["id"] for r in repo.filter_by("repairs", "vehicle.id", "V1")} == {"REP001", "REP003"}
        repo.set("notifications", "N9", {"vehicle_id": "V1", "read": 0})
        assert {n["id"] for n in repo.filter_by("notifications", "read", False)} == {"N1"}

    def test_delete_missing_is_not_an_error(self):
        repo = JsonFileRepository(data={})
        repo.delete("parts", "nope")
        assert repo.list("parts") == []

    def test_reads_while_another_thread_writes(self, seed_file):
        # in-memory only, no file rewrites
        repo = JsonFileRepository(data=json.loads(seed_file.read_text(encoding="utf-8")))
        stop = threading.Event()
        errors = []

        def writer():
            # each write adds a key, so the dicts change size under the readers
            for n in range(5000):
                if stop.is_set():
                    break
                repo.update_all("repairs", {f"k{n}": n})

        t = threading.Thread(target=writer)
        t.start()
        try:
            for _ in range(300):
                try:
                    assert len(repo.list("repairs")) == 3
                    repo.filter_by("repairs", "vehicle.id", "V1")
                    repo.get("repairs", "REP001")
                except RuntimeError as e:
                    errors.append(repr(e))
        finally:
            stop.set()
            t.join()
        assert errors == []


class TestFirestoreRepository:
    def test_update_missing_returns_none(self):
        repo = FirestoreRepository(FakeFirestoreClient())
        assert repo.update("parts", "nope", {"name": "x"}) is None

    def test_add_returns_generated_id(self):
        repo = FirestoreRepository(FakeFirestoreClient())
        doc = repo.add("clients", {"first_name": "A"})
        assert doc["id"]
        assert repo.get("clients", doc["id"]) == doc

    def test_next_id_uses_highest_suffix(self):
        client = FakeFirestoreClient({"parts": {"PRT002": {}, "PRT009": {}, "legacy": {}}})
        assert FirestoreRepository(client).next_sequential_id("parts", "PRT") == "PRT010"

    def test_bulk_writes_split_into_batches_of_500(self):
        client = FakeFirestoreClient({"repairs": {f"REP{i:04d}": {"status": "PENDING"} for i in range(1201)}})
        repo = FirestoreRepository(client)

        assert repo.update_all("repairs", {"status": "IN_PROGRESS"}) == 1201
        assert client.commits == 3
        assert {d["status"] for d in client.raw("repairs").values()} == {"IN_PROGRESS"}

        assert repo.delete_many("repairs", repo.list_ids("repairs")) == 1201
        assert client.commits == 6
        assert client.raw("repairs") == {}


class TestBuildRepository:
    CREDS = json.dumps({"type": "service_account", "project_id": "demo"})

    def test_json_backend(self, seed_file):
        repo = build_repository({"STORE_BACKEND": "json", "SEED_DATA_PATH": str(seed_file)})
        assert isinstance(repo, JsonFileRepository)
        assert repo.count("vehicles") == 3

    def test_no_credentials_falls_back(self, tmp_path, seed_file):
        repo = build_repository({
            "STORE_BACKEND": "auto",
            "FIREBASE_CREDENTIALS_PATH": str(tmp_path / "missing.json"),
            "SEED_DATA_PATH": str(seed_file),
        })
        assert repo.mode == "json"

    def test_unparseable_credentials_fall_back(self, tmp_path):
        repo = build_repository({
            "STORE_BACKEND": "firestore",
            "FIREBASE_CREDENTIALS_JSON": "{oops",
            "FIREBASE_CREDENTIALS_PATH": str(tmp_path / "missing.json"),
        })
        assert repo.mode == "json"

    def test_init_failure_falls_back(self, monkeypatch):
        def boom(info):
            raise ValueError("invalid service account")

        monkeypatch.setattr(store, "_firestore_client", boom)
        repo = build_repository({"STORE_BACKEND": "auto", "FIREBASE_CREDENTIALS_JSON": self.CREDS})
        assert isinstance(repo, JsonFileRepository)

    def test_firestore_when_credentials_work(self, monkeypatch):
        seen = {}

        def fake_client(info):
            seen.update(info)
            return FakeFirestoreClient()

        monkeypatch.setattr(store, "_firestore_client", fake_client)
        repo = build_repository({"STORE_BACKEND": "auto", "FIREBASE_CREDENTIALS_JSON": self.CREDS})
        assert isinstance(repo, FirestoreRepository)
        assert seen["project_id"] == "demo"

    def test_credentials_file(self, tmp_path):
        path = tmp_path / "serviceAccountKey.json"
        path.write_text(self.CREDS, encoding="utf-8")
        assert load_firebase_credentials({"FIREBASE_CREDENTIALS_PATH": str(path)})["project_id"] == "demo"


def test_prestart_writes_pool_metadata(monkeypatch, firestore_app, fake_firestore):
    from scripts import prestart

    monkeypatch.setattr(prestart, "create_app", lambda: firestore_app)
    prestart.main()
    assert fake_firestore.raw("slotReparation")["_metadata"]["slot_ids"] == [1, 2]
    assert fake_firestore.raw("slotAttente")["_metadata"]["capacity"] == 2
    # metadata is not a slot
    assert firestore_app.extensions["slot_managers"]["waiting"].list() == []


@pytest.mark.parametrize("pool", [repair_pool(3), waiting_pool(2)])
def test_metadata_matches_pool(pool):
    repo = FirestoreRepository(FakeFirestoreClient())
    meta = SlotManager(repo, pool).write_metadata()
    assert meta["capacity"] == pool.capacity
    assert meta["id"] == "_metadata"
