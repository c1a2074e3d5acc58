import copy
import json

import pytest

from app import create_app
from app.store import FirestoreRepository, JsonFileRepository
from tests.fakes import FakeFirestoreClient

SEED = {
    "vehicles": [
        {"id": "V1", "make": "Peugeot", "model": "208", "client_id": "C1"},
        {"id": "V2", "make": "Renault", "model": "Clio", "client_id": "C2"},
        {"id": "V3", "make": "Citroen", "model": "C3", "client_id": "C1"},
    ],
    "clients": [
        {"id": "C1", "first_name": "Sam", "last_name": "Martin"},
        {"id": "C2", "first_name": "Alex", "last_name": "Durand"},
    ],
    "owners": [
        {"id": "O1", "first_name": "Sam", "last_name": "Martin", "vehicle_ids": ["V1", "V3"]},
    ],
    "repairs": [
        {"id": "REP001", "vehicle": {"id": "V1"}, "description": "Brakes", "status": "PENDING"},
        {"id": "REP002", "vehicle": {"id": "V2"}, "description": "Clutch", "status": "DONE"},
        {"id": "REP003", "vehicle": {"id": "V1"}, "description": "Oil", "status": "PENDING"},
    ],
    "repair_completions": [
        {"id": "RC1", "repair": {"id": "REP001"}, "part": {"id": "PRT001"}, "completed_at": "2024-05-01T10:00:00"},
        {"id": "RC2", "repair": {"id": "REP003"}, "part": {"id": "PRT002"}, "completed_at": "2024-05-02T10:00:00"},
    ],
    "parts": [
        {"id": "PRT001", "name": "Brake pad", "part_type_id": "PTY001"},
        {"id": "PRT002", "name": "Oil filter", "part_type_id": "PTY001"},
    ],
    "part_types": [{"id": "PTY001", "name": "Consumable"}],
    "vehicle_types": [{"id": "VT1", "name": "City car"}],
    "payments": [
        {"id": "PAY1", "client_id": "C1", "repair_id": "REP001", "amount": 120.0},
        {"id": "PAY2", "client_id": "C2", "repair_id": "REP002", "amount": 340.0},
        {"id": "PAY3", "client_id": "C1", "repair_id": "REP003", "amount": 60.0},
    ],
    "notifications": [
        {"id": "N1", "vehicle_id": "V1", "message": "Ready soon", "read": False},
        {"id": "N2", "vehicle_id": "V2", "message": "Ready", "read": True},
        {"id": "N3", "vehicle_id": "V1", "message": "Quote sent"},
    ],
}


def firestore_seed(seed):
    """{collection: [docs]} -> {collection: {id: fields}}"""
    out = {}
    for name, docs in seed.items():
        out[name] = {d["id"]: {k: v for k, v in copy.deepcopy(d).items() if k != "id"} for d in docs}
    return out


@pytest.fixture(autouse=True)
def testing_config(monkeypatch):
    monkeypatch.setenv("APP_CONFIG", "app.config.TestingConfig")


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seedData.json"
    path.write_text(json.dumps(SEED), encoding="utf-8")
    return path


@pytest.fixture
def json_app(seed_file):
    return create_app({"SEED_DATA_PATH": str(seed_file)})


@pytest.fixture
def json_client(json_app):
    return json_app.test_client()


@pytest.fixture
def fake_firestore():
    return FakeFirestoreClient(firestore_seed(SEED))


@pytest.fixture
def firestore_repo(fake_firestore):
    return FirestoreRepository(fake_firestore)


@pytest.fixture
def firestore_app(firestore_repo):
    return create_app(repository=firestore_repo)


@pytest.fixture
def firestore_client(firestore_app):
    return firestore_app.test_client()


@pytest.fixture
def empty_firestore_client():
    return create_app(repository=FirestoreRepository(FakeFirestoreClient())).test_client()


@pytest.fixture
def empty_json_client():
    return create_app(repository=JsonFileRepository(data={})).test_client()


@pytest.fixture(params=["json", "firestore"])
def any_client(request, seed_file):
    """Same seed data behind either backend."""
    if request.param == "json":
        return create_app({"SEED_DATA_PATH": str(seed_file)}).test_client()
    repo = FirestoreRepository(FakeFirestoreClient(firestore_seed(SEED)))
    return create_app(repository=repo).test_client()
