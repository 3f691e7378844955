"""
Tests for the in-memory appointment book.
"""

import json
import logging
from datetime import date, time
from pathlib import Path

import pytest

from barberslots.adapters.memory_book import InMemoryAppointmentBook
from barberslots.domain.models import ServiceType


def _write(tmp_path, payload) -> Path:
    data_file = tmp_path / "appointments.json"
    data_file.write_text(json.dumps(payload), encoding="utf-8")
    return data_file


def test_load_from_json(tmp_path):
    data_file = _write(tmp_path, [
        {"id": 1, "date": "2024-06-10", "time": "09:00", "service": "HAIR", "owner": "alice"},
        {"id": 2, "date": "2024-06-10", "time": "14:00", "service": "hair_and_beard", "owner": "bob"},
        {"id": 3, "date": "2024-06-11", "time": "10:30", "service": "BEARD", "owner": "alice"},
    ])

    book = InMemoryAppointmentBook.load_from_json(data_file)

    on_monday = book.list_appointments_on_date(date(2024, 6, 10))
    assert {a.id for a in on_monday} == {1, 2}
    assert book.get(2).service_type is ServiceType.HAIR_AND_BEARD
    assert book.get(3).time == time(10, 30)
    assert [a.id for a in book.list_appointments_for_user_on_date("alice", date(2024, 6, 11))] == [3]
    assert {a.id for a in book.list_appointments_for_user("alice")} == {1, 3}


def test_invalid_records_are_skipped(tmp_path, caplog):
    data_file = _write(tmp_path, [
        {"id": 1, "date": "2024-06-10", "time": "09:00", "service": "HAIR", "owner": "alice"},
        {"id": 2, "date": "2024-06-10", "time": "09:00", "service": "PERM", "owner": "bob"},
        {"id": 3, "date": "10.06.2024", "time": "09:00", "service": "HAIR", "owner": "bob"},
        {"id": 4, "time": "09:00", "service": "HAIR", "owner": "bob"},
    ])

    with caplog.at_level(logging.WARNING, logger="barberslots.adapters.memory_book"):
        book = InMemoryAppointmentBook.load_from_json(data_file)

    assert [a.id for a in book.list_appointments_on_date(date(2024, 6, 10))] == [1]
    assert caplog.text.count("Skipping invalid appointment record") == 3


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        InMemoryAppointmentBook.load_from_json(tmp_path / "missing.json")


def test_non_list_root_raises(tmp_path):
    data_file = _write(tmp_path, {"id": 1})

    with pytest.raises(ValueError, match="must contain a list"):
        InMemoryAppointmentBook.load_from_json(data_file)


def test_add_and_remove():
    book = InMemoryAppointmentBook()

    first = book.add(date(2024, 6, 10), time(9, 0), ServiceType.HAIR, "alice")
    second = book.add(date(2024, 6, 10), time(9, 30), ServiceType.BEARD, "bob")

    assert (first.id, second.id) == (1, 2)

    book.remove(first.id)

    assert book.get(first.id) is None
    assert book.list_appointments_on_date(date(2024, 6, 10)) == [second]
