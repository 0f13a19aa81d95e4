"""
Tests for MedGuide Reminders

Tests the reminder functionality including:
- Reminder models and field validation
- Store add/delete/list and ordering
- Snapshot persistence and corrupted snapshots
- Storage failures surfacing as warnings
"""

import sys
import json
import logging
import tempfile
from pathlib import Path

print("="*70)
print("Starting MedGuide Reminder Tests...")
print("="*70)

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from medguide.memory import (
    STORAGE_KEY,
    Frequency,
    JsonFileStorage,
    MemoryStorage,
    PersistenceWarning,
    Reminder,
    ReminderStore,
    ReminderStoreError,
    ValidationError,
    create_reminder,
    normalize_time,
    serialize_reminders,
)
from medguide.services import ReminderService

print("\n✓ Imports successful\n")

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _new_store(storage=None, **kwargs) -> ReminderStore:
    return ReminderStore(storage or MemoryStorage(), **kwargs).init()


def _raises_validation(func, *args) -> bool:
    try:
        func(*args)
    except ValidationError:
        return True
    return False


def test_reminder_models():
    """Test reminder data models"""
    print("\n" + "="*70)
    print("TEST 1: Reminder Models")
    print("="*70)

    print("\n[1.1] Testing reminder creation...")
    reminder = create_reminder("  Paracetamol ", "8:00", "Daily")
    assert reminder.name == "Paracetamol"
    assert reminder.time == "08:00"
    assert reminder.frequency == Frequency.DAILY
    assert reminder.id
    print(f"✓ Reminder created: {reminder.id}")

    print("\n[1.2] Testing time normalization...")
    assert normalize_time("23:59") == "23:59"
    assert normalize_time("0:05") == "00:05"
    for bad in ["", "   ", "24:00", "12:60", "noon", "8", "08:00:00", "\u0668:\u0660\u0660", "\u0660\u0668:\u0660\u0660", None]:
        assert _raises_validation(normalize_time, bad), f"Should reject {bad!r}"
    print("✓ Times validated")

    print("\n[1.3] Testing frequency tokens...")
    assert Frequency.parse("alternate") == Frequency.ALTERNATE
    assert _raises_validation(Frequency.parse, "weekly")
    assert _raises_validation(Frequency.parse, "")
    assert Frequency.ALTERNATE.label == "Every other day"
    print("✓ Frequencies validated")

    print("\n[1.4] Testing display time...")
    assert create_reminder("A", "00:15", "once").display_time == "12:15 AM"
    assert create_reminder("A", "08:00", "once").display_time == "8:00 AM"
    assert create_reminder("A", "12:30", "once").display_time == "12:30 PM"
    assert create_reminder("A", "21:05", "once").display_time == "9:05 PM"
    print("✓ 12-hour display correct")

    print("\n[1.5] Testing serialization...")
    data = reminder.to_dict()
    assert data == {
        'id': reminder.id,
        'name': "Paracetamol",
        'time': "08:00",
        'frequency': "daily",
    }
    assert Reminder.from_dict(data) == reminder
    assert _raises_validation(Reminder.from_dict, {**data, 'frequency': "hourly"})
    assert _raises_validation(Reminder.from_dict, {**data, 'name': "  "})
    assert _raises_validation(Reminder.from_dict, "not a dict")
    print("✓ Serialization/deserialization works")

    print("\n✅ Reminder models test PASSED")


def test_add_and_list():
    """Test adding reminders"""
    print("\n" + "="*70)
    print("TEST 2: Add and List")
    print("="*70)

    store = _new_store()

    print("\n[2.1] Testing first reminder...")
    reminder = store.add({"name": "Paracetamol", "time": "08:00", "frequency": "daily"})
    reminders = store.list()
    assert len(reminders) == 1
    assert reminders[0] == reminder
    assert (reminder.name, reminder.time, reminder.frequency.value) == ("Paracetamol", "08:00", "daily")
    assert reminder.id
    print(f"✓ Added: {reminder.id}")

    print("\n[2.2] Testing trimmed input and unique IDs...")
    ids = {reminder.id}
    for i in range(20):
        added = store.add({"name": f"  Med {i}  ", "time": "09:30", "frequency": "once"})
        assert added.name == f"Med {i}"
        assert added.id not in ids
        ids.add(added.id)
    assert len(store) == 21
    print(f"✓ {len(ids)} unique IDs")

    print("\n[2.3] Testing insertion order...")
    names = [r.name for r in store.list()]
    assert names == ["Paracetamol"] + [f"Med {i}" for i in range(20)]
    print("✓ Insertion order kept")

    print("\n[2.4] Testing list() returns a copy...")
    listed = store.list()
    listed.clear()
    assert len(store.list()) == 21
    print("✓ Internal list not exposed")

    print("\n[2.5] Testing stats...")
    stats = store.stats()
    assert stats == {'total': 21, 'once': 20, 'daily': 1, 'alternate': 0}
    print(f"✓ Stats: {stats}")

    print("\n✅ Add and list test PASSED")


def test_invalid_input_leaves_store_unchanged():
    """Test validation failures"""
    print("\n" + "="*70)
    print("TEST 3: Invalid Input")
    print("="*70)

    storage = MemoryStorage()
    store = _new_store(storage)
    store.add({"name": "Ibuprofen", "time": "20:00", "frequency": "alternate"})
    before = store.list()
    snapshot_before = storage.get_item(STORAGE_KEY)

    invalid = [
        {"name": "  ", "time": "08:00", "frequency": "daily"},
        {"name": "", "time": "08:00", "frequency": "daily"},
        {"name": "Aspirin", "time": "", "frequency": "daily"},
        {"name": "Aspirin", "time": "25:00", "frequency": "daily"},
        {"name": "Aspirin", "time": "08:00", "frequency": ""},
        {"name": "Aspirin", "time": "08:00", "frequency": "weekly"},
        {"name": "Aspirin", "time": "08:00"},
        {},
    ]

    for i, candidate in enumerate(invalid, start=1):
        print(f"\n[3.{i}] Testing {candidate}...")
        assert _raises_validation(store.add, candidate)
        assert store.list() == before
        assert storage.get_item(STORAGE_KEY) == snapshot_before
        print("✓ Rejected, nothing changed")

    print("\n[3.x] Testing whitespace-only name on empty store...")
    empty = _new_store()
    assert _raises_validation(empty.add, {"name": "  ", "time": "08:00", "frequency": "daily"})
    assert empty.list() == []
    print("✓ Store still empty")

    print("\n✅ Invalid input test PASSED")


def test_delete():
    """Test deleting reminders"""
    print("\n" + "="*70)
    print("TEST 4: Delete")
    print("="*70)

    storage = MemoryStorage()
    store = _new_store(storage)

    print("\n[4.1] Testing delete first of two...")
    first = store.add({"name": "Metformin", "time": "07:00", "frequency": "daily"})
    second = store.add({"name": "Aspirin", "time": "21:00", "frequency": "once"})
    store.delete(first.id)
    assert store.list() == [second]
    print("✓ Only the second remains, unchanged")

    print("\n[4.2] Testing delete of unknown ID...")
    before = store.list()
    store.delete("does-not-exist")
    assert store.list() == before
    print("✓ No-op")

    print("\n[4.3] Testing order preserved...")
    a = store.add({"name": "A", "time": "01:00", "frequency": "once"})
    b = store.add({"name": "B", "time": "02:00", "frequency": "once"})
    c = store.add({"name": "C", "time": "03:00", "frequency": "once"})
    store.delete(b.id)
    assert store.list() == [second, a, c]
    print("✓ Relative order kept")

    print("\n[4.4] Testing snapshot follows delete...")
    saved = json.loads(storage.get_item(STORAGE_KEY))
    assert [r['id'] for r in saved] == [second.id, a.id, c.id]
    print("✓ Snapshot rewritten")

    print("\n✅ Delete test PASSED")


def test_persistence_round_trip():
    """Test snapshot persistence"""
    print("\n" + "="*70)
    print("TEST 5: Persistence")
    print("="*70)

    with tempfile.TemporaryDirectory() as tmpdir:
        storage_path = Path(tmpdir) / "test_storage.json"
        store = _new_store(JsonFileStorage(storage_path))

        print(f"\n[5.1] Testing with storage: {storage_path}")
        store.add({"name": "Paracetamol", "time": "08:00", "frequency": "daily"})
        store.add({"name": "Amoxicillin", "time": "14:00", "frequency": "alternate"})
        store.add({"name": "Warfarin", "time": "18:45", "frequency": "once"})

        print("\n[5.2] Testing snapshot layout...")
        with open(storage_path, 'r', encoding='utf-8') as f:
            on_disk = json.load(f)
        snapshot = json.loads(on_disk[STORAGE_KEY])
        assert [set(r.keys()) for r in snapshot] == [{'id', 'name', 'time', 'frequency'}] * 3
        assert snapshot[1]['frequency'] == "alternate"
        print("✓ Snapshot is an ordered list of records")

        print("\n[5.3] Testing read-after-write...")
        assert store.load() == store.list()
        print("✓ load() matches list()")

        print("\n[5.4] Testing persistence across store instances...")
        store2 = _new_store(JsonFileStorage(storage_path))
        assert store2.list() == store.list()
        print("✓ Reminders persisted")

        print("\n[5.5] Testing serialize then load...")
        memory = MemoryStorage({STORAGE_KEY: serialize_reminders(store.list())})
        assert ReminderStore(memory).load() == store.list()
        print("✓ Round trip equal field-for-field")

    print("\n✅ Persistence test PASSED")


def test_corrupt_snapshot():
    """Test corrupted snapshots"""
    print("\n" + "="*70)
    print("TEST 6: Corrupted Snapshot")
    print("="*70)

    print("\n[6.1] Testing unparseable snapshot...")
    store = _new_store(MemoryStorage({STORAGE_KEY: "{not json"}))
    assert store.list() == []
    assert isinstance(store.last_warning, PersistenceWarning)
    assert store.last_warning.operation == "load"
    print(f"✓ Empty list, warning: {store.last_warning}")

    print("\n[6.2] Testing wrong shape...")
    for raw in ['{"id": "x"}', 'null', '42']:
        store = _new_store(MemoryStorage({STORAGE_KEY: raw}))
        assert store.list() == []
        assert len(store.warnings) == 1
    print("✓ Wrong shapes ignored")

    print("\n[6.3] Testing partially invalid records...")
    good = create_reminder("Losartan", "10:00", "daily")
    raw = json.dumps([
        good.to_dict(),
        {"id": "bad", "name": "X", "time": "10:00", "frequency": "hourly"},
        {"id": good.id, "name": "Dup", "time": "11:00", "frequency": "once"},
        "garbage",
    ])
    store = _new_store(MemoryStorage({STORAGE_KEY: raw}))
    assert store.list() == [good]
    assert "Skipped 3" in str(store.last_warning)
    print("✓ Invalid and duplicate records skipped")

    print("\n[6.4] Testing no snapshot at all...")
    store = _new_store(MemoryStorage())
    assert store.list() == []
    assert store.warnings == []
    print("✓ Empty, no warning")

    print("\n[6.5] Testing corrupted storage file...")
    with tempfile.TemporaryDirectory() as tmpdir:
        storage_path = Path(tmpdir) / "storage.json"
        storage_path.write_text("{{{ definitely not json", encoding='utf-8')

        store = _new_store(JsonFileStorage(storage_path))
        assert store.list() == []
        assert storage_path.with_suffix('.json.bak').exists()

        store.add({"name": "Insulin", "time": "06:30", "frequency": "daily"})
        reloaded = _new_store(JsonFileStorage(storage_path))
        assert [r.name for r in reloaded.list()] == ["Insulin"]
        print("✓ Corrupted file backed up, fresh storage works")

    print("\n[6.6] Testing undecodable storage file at startup...")
    with tempfile.TemporaryDirectory() as tmpdir:
        storage_path = Path(tmpdir) / "storage.json"
        storage_path.write_bytes(b'{"medguide-medicines": "\xff\xfe"}')

        store = _new_store(JsonFileStorage(storage_path))
        assert store.list() == []
        assert storage_path.with_suffix('.json.bak').exists()
        print("✓ Startup not blocked by invalid UTF-8")

    print("\n[6.7] Testing file corrupted mid-session...")
    with tempfile.TemporaryDirectory() as tmpdir:
        storage_path = Path(tmpdir) / "storage.json"
        store = _new_store(JsonFileStorage(storage_path))
        first = store.add({"name": "Insulin", "time": "06:30", "frequency": "daily"})

        storage_path.write_bytes(b"\xff\xfe")
        second = store.add({"name": "Warfarin", "time": "18:00", "frequency": "daily"})
        assert store.list() == [first, second]
        reloaded = _new_store(JsonFileStorage(storage_path))
        assert reloaded.list() == [first, second]

        storage_path.write_bytes(b"\xff\xfe")
        store.delete(first.id)
        assert store.list() == [second]
        reloaded = _new_store(JsonFileStorage(storage_path))
        assert reloaded.list() == [second]
        print("✓ add/delete survive a corrupted file and rewrite it")

    print("\n✅ Corrupted snapshot test PASSED")


def test_storage_unavailable():
    """Test storage failures becoming warnings"""
    print("\n" + "="*70)
    print("TEST 7: Storage Unavailable")
    print("="*70)

    received = []
    storage = MemoryStorage()
    store = _new_store(storage, on_warning=received.append)

    print("\n[7.1] Testing add with storage disabled...")
    storage.available = False
    reminder = store.add({"name": "Prednisone", "time": "08:00", "frequency": "once"})
    assert store.list() == [reminder]
    assert len(received) == 1
    assert received[0].operation == "add"
    assert not isinstance(received[0], ValidationError)
    print(f"✓ In-memory add kept, warning: {received[0]}")

    print("\n[7.2] Testing delete with storage disabled...")
    store.delete(reminder.id)
    assert store.list() == []
    assert [w.operation for w in store.warnings] == ["add", "delete"]
    print("✓ In-memory delete kept")

    print("\n[7.3] Testing load with storage disabled...")
    assert ReminderStore(storage).load() == []
    print("✓ load() does not raise")

    print("\n[7.4] Testing clear_warnings...")
    store.clear_warnings()
    assert store.last_warning is None
    print("✓ Warnings cleared")

    print("\n✅ Storage unavailable test PASSED")


def test_store_lifecycle():
    """Test init/dispose"""
    print("\n" + "="*70)
    print("TEST 8: Store Lifecycle")
    print("="*70)

    storage = MemoryStorage()
    store = ReminderStore(storage)

    print("\n[8.1] Testing use before init...")
    try:
        store.add({"name": "A", "time": "08:00", "frequency": "once"})
        assert False, "Should require init()"
    except ReminderStoreError:
        print("✓ Rejected before init")

    print("\n[8.2] Testing init loads once...")
    store.init()
    store.add({"name": "A", "time": "08:00", "frequency": "once"})
    storage.set_item(STORAGE_KEY, "[]")
    store.init()
    assert len(store.list()) == 1
    print("✓ Second init() is a no-op")

    print("\n[8.3] Testing dispose...")
    store.dispose()
    assert not store.is_active
    try:
        store.list()
        assert False, "Should fail after dispose()"
    except ReminderStoreError:
        print("✓ Rejected after dispose")
    try:
        len(store)
        assert False, "len() should fail after dispose()"
    except ReminderStoreError:
        print("✓ len() rejected after dispose")
    try:
        store.init()
        assert False, "Should not re-initialize"
    except ReminderStoreError:
        print("✓ Cannot re-initialize")

    print("\n✅ Store lifecycle test PASSED")


def test_reminder_service():
    """Test user-facing reminder actions"""
    print("\n" + "="*70)
    print("TEST 9: Reminder Service")
    print("="*70)

    storage = MemoryStorage()
    service = ReminderService(_new_store(storage))

    print("\n[9.1] Testing add notice...")
    assert service.summary() == "No reminders yet"
    notices = service.add_reminder("Omeprazole", "07:15", "daily")
    assert len(notices) == 1
    assert notices[0].title.startswith("Success")
    assert "Omeprazole" in notices[0].description
    assert service.summary() == "You have 1 active reminder"
    print(f"✓ {notices[0]}")

    print("\n[9.2] Testing validation notice...")
    notices = service.add_reminder("", "07:15", "daily")
    assert notices[0].title == "Validation Error"
    assert notices[0].is_error
    assert len(service.list_reminders()) == 1
    print(f"✓ {notices[0]}")

    print("\n[9.3] Testing formatting...")
    reminder = service.list_reminders()[0]
    assert service.format_reminder(reminder) == "Omeprazole - 7:15 AM (Daily)"
    print("✓ Reminder formatted correctly")

    print("\n[9.4] Testing save warning notice...")
    storage.available = False
    notices = service.add_reminder("Codeine", "22:00", "once")
    assert [n.variant for n in notices] == ["default", "warning"]
    assert service.summary() == "You have 2 active reminders"
    print(f"✓ {notices[1]}")

    print("\n[9.5] Testing delete notices...")
    storage.available = True
    notices = service.delete_reminder(reminder.id)
    assert notices[0].title == "Reminder Deleted"
    notices = service.delete_reminder(reminder.id)
    assert notices[0].title == "Reminder not found"
    assert not notices[0].is_error
    print("✓ Delete reported")

    print("\n✅ Reminder service test PASSED")


def run_all_tests():
    """Run all reminder tests"""
    print("\n" + "="*70)
    print("MEDGUIDE REMINDER TESTS")
    print("="*70)

    test_reminder_models()
    test_add_and_list()
    test_invalid_input_leaves_store_unchanged()
    test_delete()
    test_persistence_round_trip()
    test_corrupt_snapshot()
    test_storage_unavailable()
    test_store_lifecycle()
    test_reminder_service()

    print("\n" + "="*70)
    print("✅ ALL REMINDER TESTS PASSED")
    print("="*70)


if __name__ == "__main__":
    run_all_tests()
