from dormitory.enums.room_type import RoomType
from dormitory.services.fallback_service import create_initial_buildings


def test_initial_buildings_shape():
    buildings = create_initial_buildings()

    assert [b.id for b in buildings] == ["b1", "b2"]
    for building in buildings:
        assert [f.number for f in building.floors] == [4, 3, 2, 1]
        for floor in building.floors:
            assert len(floor.rooms) == 4
            for room in floor.rooms:
                assert room.residents == []
                assert room.bills == {}


def test_initial_room_numbering_and_types():
    top_floor = create_initial_buildings()[1].floors[0]

    assert top_floor.id == "b2-f4"
    assert [r.number for r in top_floor.rooms] == ["2401", "2402", "2403", "2404"]
    assert [r.type for r in top_floor.rooms] == [
        RoomType.SINGLE,
        RoomType.SINGLE,
        RoomType.DOUBLE,
        RoomType.DOUBLE,
    ]


def test_initial_buildings_are_deterministic():
    assert create_initial_buildings() == create_initial_buildings()
