"""
Tests for the guest directory, RSVP tracker, event settings and check-in ledger
"""

from app.schemas.guest import GuestUpdate
from app.schemas.rsvp import Attendance, RsvpStatus
from app.services.repositories import CheckinRepo, EventSettingsRepo, RsvpRepo
from app.services.storage import RSVPS

def test_lookup_trims_but_is_case_sensitive(store, seed_guests):
    guests = seed_guests(store)

    assert guests.lookup("  G1 \n").name == "A"
    assert guests.lookup("g1") is None
    assert guests.lookup("") is None
    assert guests.lookup(None) is None

def test_update_profile_writes_only_supplied_fields(store, seed_guests):
    guests = seed_guests(store)

    updated = guests.update_profile("G2", GuestUpdate(salutation="Ms.", position="Lead"))
    assert updated.salutation == "Ms."
    assert updated.position == "Lead"
    assert updated.name == "B"
    assert updated.company == "X"
    assert guests.lookup("G2").position == "Lead"

def test_update_profile_does_not_validate(store, seed_guests):
    guests = seed_guests(store)

    updated = guests.update_profile("G1", GuestUpdate(name="   "))
    assert updated.name == "   "

def test_update_profile_unknown_guest(store, seed_guests):
    guests = seed_guests(store)

    assert guests.update_profile("NOPE", GuestUpdate(name="X")) is None
    assert guests.lookup("NOPE") is None
    assert guests.count() == 3

def test_rsvp_is_upserted_not_appended(store):
    rsvps = RsvpRepo(store)

    first = rsvps.record_attendance("G1", Attendance.YES)
    assert first.status is RsvpStatus.CONFIRMED
    assert first.confirmed_at is not None

    second = rsvps.record_attendance("G1", "no")
    assert second.status is RsvpStatus.DECLINED
    assert second.attendance is Attendance.NO

    assert store.count(RSVPS) == 1
    assert rsvps.get("G1").status is RsvpStatus.DECLINED

def test_rsvp_maybe_declines_and_keeps_details(store):
    rsvps = RsvpRepo(store)

    rsvps.record_attendance("G1", "yes", dietary_requirements="vegetarian", plus_one=True, plus_one_name="Bob")
    rsvp = rsvps.record_attendance("G1", "maybe")

    assert rsvp.status is RsvpStatus.DECLINED
    assert rsvp.dietary_requirements == "vegetarian"
    assert rsvp.plus_one is True
    assert rsvp.plus_one_name == "Bob"

def test_rsvp_absent(store):
    assert RsvpRepo(store).get("G1") is None

def test_rsvp_stats(store):
    rsvps = RsvpRepo(store)
    rsvps.record_attendance("G1", "yes")
    rsvps.record_attendance("G2", "yes")
    rsvps.record_attendance("G3", "no")

    assert rsvps.stats() == {"total": 3, "confirmed": 2, "declined": 1, "pending": 0}

def test_settings_defaults_when_unset(store):
    settings = EventSettingsRepo(store).get()

    assert settings.checkin_enabled is False
    assert settings.rsvp_enabled is True
    assert settings.require_confirmation is True
    assert settings.allow_walk_in is False

def test_settings_toggle_and_update_merge(store):
    repo = EventSettingsRepo(store)

    assert repo.toggle_checkin().checkin_enabled is True
    repo.update({"eventLocation": "Hall A", "eventDate": "2025-12-01"})

    settings = repo.get()
    assert settings.checkin_enabled is True
    assert settings.event_location == "Hall A"
    assert settings.event_date == "2025-12-01"

    assert repo.toggle_checkin().checkin_enabled is False
    assert repo.get().event_location == "Hall A"

def test_ledger_append_is_at_most_once(store):
    ledger = CheckinRepo(store)

    first, created = ledger.append("G1", "A")
    assert created
    assert first.id == "G1"
    assert first.checkin_time.endswith("Z")

    again, created = ledger.append("G1", "Someone else")
    assert not created
    assert again == first
    assert ledger.count() == 1

def test_ledger_lists_newest_first(store):
    ledger = CheckinRepo(store)
    for key, ts in [("G1", 100), ("G2", 300), ("G3", 200)]:
        store.insert_unique("checkins", key, {"id": key, "name": key, "checkinTime": "t", "timestamp": ts})

    assert [c.id for c in ledger.list_all()] == ["G2", "G3", "G1"]
    assert [c.id for c in ledger.recent(2)] == ["G2", "G3"]
    assert ledger.find("G3").timestamp == 200
    assert ledger.find("G9") is None
