import os

os.environ["DATABASE_URL"] = "sqlite://"

from collections import defaultdict

import pytest
from fastapi.testclient import TestClient

from dormitory.database.init import build_engine
from dormitory.enums.table_name import RecordOperation, TableName
from dormitory.enums.user_role import UserRole
from dormitory.main import create_app
from dormitory.services.dormitory_service import DormitoryService
from dormitory.services.record_store import RecordStore, SqlRecordStore

MONTH = "2024-01"


class RecordingStore(RecordStore):
    """In-memory store keeping the last write per id and every call made."""

    def __init__(self, data=None, fail_fetch=False, fail_writes=False):
        self.calls = []
        self.fail_fetch = fail_fetch
        self.fail_writes = fail_writes
        self.tables = defaultdict(dict)
        for table, rows in (data or {}).items():
            for row in rows:
                self.tables[table][str(row["id"])] = dict(row)

    def fetch_all(self):
        if self.fail_fetch:
            raise ConnectionError("record store unreachable")
        return {str(table): list(self.tables[str(table)].values()) for table in TableName}

    def save(self, table, operation, record):
        table = TableName(table)
        operation = RecordOperation(operation)
        self.calls.append((table, operation, dict(record)))
        if self.fail_writes:
            raise ConnectionError("write rejected")
        if operation == RecordOperation.ADD:
            self.tables[str(table)][str(record["id"])] = dict(record)
        else:
            self.tables[str(table)].pop(str(record["id"]), None)

    def rows(self, table):
        return self.tables[str(table)]


def sample_rows():
    return {
        "Buildings": [{"id": 1, "name": "Building A"}, {"id": "2", "name": "Building B"}],
        "Floors": [
            {"id": "f1", "number": 1, "buildingId": 1},
            {"id": "f2", "number": 2, "buildingId": "1", "name": "Top Floor"},
            {"id": "f3", "number": 1, "buildingId": 2},
        ],
        "Rooms": [
            {"id": "r2", "number": "102", "type": "DOUBLE", "floorId": "f1"},
            {"id": "r1", "number": "101", "type": "SINGLE", "floorId": "f1"},
            {"id": "r3", "number": "201", "type": "DOUBLE", "floorId": "f2"},
            {"id": "r4", "number": "201", "type": "SINGLE", "floorId": "f3"},
        ],
        "Residents": [
            {"id": "res1", "name": "Alice", "roomId": "r1", "roomNumber": "101"},
            {"id": "res2", "name": "Bob", "roomId": "r2", "roomNumber": "102"},
        ],
        "Bills": [
            {
                "id": "r1-2024-01",
                "roomId": "r1",
                "month": MONTH,
                "waterUnits": 10,
                "waterPrice": 180,
                "electricityUnits": 5,
                "electricityPrice": 35,
            }
        ],
    }


@pytest.fixture
def store():
    return RecordingStore(sample_rows())


@pytest.fixture
def dormitory(store):
    service = DormitoryService(store, month=MONTH)
    service.load()
    store.calls.clear()
    return service


@pytest.fixture
def sql_store():
    sql_store = SqlRecordStore(build_engine("sqlite://"))
    sql_store.prepare()
    return sql_store


@pytest.fixture
def client(store):
    app = create_app(store)
    app.state.dormitory.current_month = MONTH
    with TestClient(app) as client:
        yield client


def signin(client, username, password):
    response = client.post("/auth/signin", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['data']['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return signin(client, "popa", "popa")


@pytest.fixture
def water_headers(client):
    client.app.state.dormitory.add_user("meter", "secret", UserRole.WATER, "Water Reader")
    return signin(client, "meter", "secret")
