import pytest

from dormitory.enums.table_name import RecordOperation, TableName
from dormitory.services.record_store import RemoteWriter
from dormitory.services.tree_builder import build_tree

ADD = RecordOperation.ADD
DELETE = RecordOperation.DELETE


def rows(store, table):
    return {row["id"]: row for row in store.fetch_all()[str(table)]}


def seed_tree(store):
    store.save(TableName.BUILDINGS, ADD, {"id": "b1", "name": "A"})
    store.save(TableName.FLOORS, ADD, {"id": "f1", "number": 1, "buildingId": "b1"})
    store.save(TableName.ROOMS, ADD, {"id": "r1", "number": "101", "type": "DOUBLE", "floorId": "f1"})
    store.save(TableName.RESIDENTS, ADD, {"id": "p1", "name": "Alice", "roomId": "r1", "roomNumber": "101"})
    store.save(
        TableName.BILLS,
        ADD,
        {
            "id": "r1-2024-01",
            "roomId": "r1",
            "roomNumber": "101",
            "month": "2024-01",
            "waterUnits": 10,
            "waterPrice": 180,
            "electricityUnits": 3,
            "electricityPrice": 21,
        },
    )


def test_add_twice_keeps_the_later_payload(sql_store):
    sql_store.save(TableName.BUILDINGS, ADD, {"id": "b1", "name": "First"})
    sql_store.save(TableName.BUILDINGS, ADD, {"id": "b1", "name": "Second"})

    assert rows(sql_store, TableName.BUILDINGS) == {"b1": {"id": "b1", "name": "Second"}}


def test_partial_payload_keeps_other_columns(sql_store):
    sql_store.save(TableName.RESIDENTS, ADD, {"id": "p1", "name": "Alice", "roomId": "r1", "roomNumber": "101"})
    sql_store.save(TableName.RESIDENTS, ADD, {"id": "p1", "name": "Alicia", "roomId": "r1"})

    assert rows(sql_store, TableName.RESIDENTS)["p1"] == {
        "id": "p1",
        "name": "Alicia",
        "roomId": "r1",
        "roomNumber": "101",
    }


def test_numeric_ids_are_stored_as_strings(sql_store):
    sql_store.save(TableName.FLOORS, ADD, {"id": 5, "number": "2", "buildingId": 1})

    assert rows(sql_store, TableName.FLOORS)["5"]["buildingId"] == "1"


def test_fetched_rows_build_the_tree(sql_store):
    seed_tree(sql_store)

    data = sql_store.fetch_all()
    tree = build_tree(
        data["Buildings"], data["Floors"], data["Rooms"], data["Residents"], data["Bills"]
    )

    room = tree[0].floors[0].rooms[0]
    assert room.capacity == 2
    assert [r.name for r in room.residents] == ["Alice"]
    assert room.bills["2024-01"].water == 180
    assert room.bills["2024-01"].electricity_units == 3


def test_deleting_a_building_removes_its_descendants(sql_store):
    seed_tree(sql_store)
    sql_store.save(TableName.BUILDINGS, ADD, {"id": "b2", "name": "B"})

    sql_store.save(TableName.BUILDINGS, DELETE, {"id": "b1"})

    data = sql_store.fetch_all()
    assert [b["id"] for b in data["Buildings"]] == ["b2"]
    assert data["Floors"] == []
    assert data["Rooms"] == []
    assert data["Residents"] == []
    assert data["Bills"] == []


def test_deleting_a_resident_leaves_the_room(sql_store):
    seed_tree(sql_store)

    sql_store.save(TableName.RESIDENTS, DELETE, {"id": "p1"})

    assert rows(sql_store, TableName.RESIDENTS) == {}
    assert "r1" in rows(sql_store, TableName.ROOMS)


def test_bill_without_id_is_keyed_by_room_and_month(sql_store):
    sql_store.save(TableName.BILLS, ADD, {"roomId": "r9", "month": "2024-05", "waterUnits": 1})

    assert "r9-2024-05" in rows(sql_store, TableName.BILLS)


def test_invalid_record_raises(sql_store):
    with pytest.raises(ValueError):
        sql_store.save(TableName.ROOMS, ADD, {"id": "r1", "number": "101"})


def test_remote_writer_reports_failures(sql_store, capsys):
    write = RemoteWriter(sql_store)

    assert write(TableName.BUILDINGS, ADD, {"id": "b1", "name": "A"}) is True
    assert write(TableName.ROOMS, ADD, {"id": "r1"}) is False
    assert "Error saving ADD to Rooms (id=r1)" in capsys.readouterr().out
