from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from app.locations import Coordinates, Location, LocationDatabase, LocationId, NewLocation
from app.locations.database import FIRST_LOCATION_ID

NEAR_1 = Coordinates(lat=37.760889, lng=-122.435020)
NEAR_3 = Coordinates(lat=37.881, lng=-121.914)
ORIGINAL_2 = Coordinates(lat=37.759418, lng=-122.435263)
MOVED_2 = Coordinates(lat=37.764766, lng=-122.449488)


def _location(location_id: int, lat: float, lng: float, name: str = "Coffee") -> Location:
    return Location(
        id=LocationId(location_id), name=name, address=f"{location_id} Main St", lat=lat, lng=lng
    )


@pytest.fixture
def three() -> LocationDatabase:
    db = LocationDatabase()
    db.update(_location(1, 37.760889, -122.435010, "Reveille"))
    db.update(_location(2, 37.759418, -122.435263, "Spike's"))
    db.update(_location(3, 37.881658, -121.914146, "Diablo"))
    return db


@pytest.fixture
def wildcraft() -> Location:
    return Location(
        id=LocationId(14),
        name="Wildcraft Espresso Bar",
        address="2299 Market St",
        lat=37.7641264665863,
        lng=-122.4330686990795,
    )


def test_empty_database():
    db = LocationDatabase()
    assert db.size == 0
    assert len(db) == 0
    assert db.index_size == 0
    assert db.get(1) is None
    assert db.find_nearest(NEAR_1, 100.0) is None


def test_add_assigns_increasing_ids():
    db = LocationDatabase()
    first = db.add(NewLocation(name="A", address="1 A St", lat=1.0, lng=1.0))
    second = db.add(NewLocation(name="B", address="2 B St", lat=2.0, lng=2.0))
    assert first.id == FIRST_LOCATION_ID
    assert second.id == FIRST_LOCATION_ID + 1
    assert db.get(first.id) == first
    assert db.size == 2


def test_add_never_reuses_loaded_or_removed_ids(three):
    created = three.add(NewLocation(name="New", address="1 New St", lat=0.0, lng=0.0))
    assert created.id == 4
    assert three.remove(4) is True
    again = three.add(NewLocation(name="Newer", address="2 New St", lat=0.0, lng=0.0))
    assert again.id == 5


def test_update_with_high_id_moves_id_counter_forward():
    db = LocationDatabase()
    db.update(_location(40, 1.0, 1.0))
    assert db.add(NewLocation(name="A", address="a", lat=0.0, lng=0.0)).id == 41


def test_create_and_read(wildcraft):
    db = LocationDatabase()
    db.add(NewLocation(name="Other", address="1 Other St", lat=0.0, lng=0.0))
    size = db.size
    db.update(wildcraft)
    assert db.get(wildcraft.id) == wildcraft
    assert db.size == size + 1


def test_update_changes_content_not_size(wildcraft):
    db = LocationDatabase()
    db.update(wildcraft)
    renamed = wildcraft.copy(name="Ritual Coffee Roasters")
    db.update(renamed)
    assert db.get(wildcraft.id) == renamed
    assert db.size == 1


def test_update_twice_is_idempotent(wildcraft):
    db = LocationDatabase()
    db.update(wildcraft)
    db.update(wildcraft)
    assert db.get(wildcraft.id) == wildcraft
    assert db.size == 1
    # Second insert lands in the index; the first one is now a tombstone.
    assert db.index_size == 2
    assert db.orphaned_entries == 1


def test_remove_live_location(three):
    assert three.remove(1) is True
    assert three.get(1) is None
    assert three.size == 2


@pytest.mark.parametrize("location_id", [999, 0, -1])
def test_remove_unknown_location(three, location_id):
    assert three.remove(location_id) is False
    assert three.size == 3


def test_remove_twice(three):
    assert three.remove(2) is True
    assert three.remove(2) is False
    assert three.size == 2


def test_remove_orphans_but_keeps_index_entry(three):
    three.remove(3)
    assert three.index_size == 3
    assert three.orphaned_entries == 1


def test_returned_records_are_copies(three):
    location = three.get(1)
    location.name = "Mutated"
    assert three.get(1).name == "Reveille"

    nearest = three.find_nearest(NEAR_1, 1.0)
    nearest.lat = 0.0
    assert three.get(1).lat == pytest.approx(37.760889)


def test_stored_record_is_not_aliased_to_caller(wildcraft):
    db = LocationDatabase()
    db.update(wildcraft)
    wildcraft.name = "Changed after update"
    assert db.get(14).name == "Wildcraft Espresso Bar"


def test_find_nearest_picks_closest(three):
    assert three.find_nearest(NEAR_1, 1.0).id == 1


def test_find_nearest_radius_too_small(three):
    assert three.find_nearest(NEAR_3, 0.01) is None


def test_find_nearest_falls_through_after_remove(three):
    three.remove(1)
    assert three.find_nearest(NEAR_1, 1.0).id == 2
    three.remove(2)
    assert three.find_nearest(NEAR_1, 1.0) is None


def test_find_nearest_after_move(three):
    three.update(_location(2, MOVED_2.lat, MOVED_2.lng, "Spike's"))
    # Near the old position only id 1 (~0.1 mi away) is still in range.
    assert three.find_nearest(ORIGINAL_2, 0.5).id == 1
    three.remove(1)
    assert three.find_nearest(ORIGINAL_2, 0.5) is None
    assert three.find_nearest(MOVED_2, 0.1).id == 2


def test_find_nearest_ignores_stale_position_after_many_updates():
    db = LocationDatabase()
    for step in range(5):
        db.update(_location(7, 10.0 + step, 10.0))
    assert db.index_size == 5
    assert db.find_nearest(Coordinates(lat=10.0, lng=10.0), 10.0) is None
    assert db.find_nearest(Coordinates(lat=14.0, lng=10.0), 10.0).id == 7


def test_update_resurrects_removed_id(three):
    three.remove(3)
    three.update(_location(3, 37.881658, -121.914146, "Diablo again"))
    assert three.get(3).name == "Diablo again"
    assert three.find_nearest(Coordinates(lat=37.881658, lng=-121.914146), 0.01).id == 3
    assert three.size == 3


def test_find_nearest_in_kilometres(three):
    assert three.find_nearest(NEAR_1, 0.01, "km").id == 1
    assert three.find_nearest(NEAR_3, 0.05, "km") is None


def test_find_nearest_tolerates_dangling_tag(three):
    # A live tag whose record vanished must be skipped, not raise.
    three._locations.pop(LocationId(1))
    assert three.find_nearest(NEAR_1, 1.0).id == 2


def test_concurrent_adds_get_unique_ids():
    db = LocationDatabase()

    def _add(i: int) -> int:
        return db.add(NewLocation(name=f"L{i}", address="x", lat=0.0, lng=i / 1000.0)).id

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(_add, range(200)))

    assert len(set(ids)) == 200
    assert db.size == 200
    assert db.orphaned_entries == 0
