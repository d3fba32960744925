"""
Unit tests for Appointment Scheduling Entities.

Tests:
- Schedule validation
- Appointment state machine and invariants
- Serialization to the append store form
"""

from datetime import UTC, datetime, timedelta

import pytest

from app.domains.appointment_scheduling.domain.entities import Appointment, Insured, Schedule
from app.domains.appointment_scheduling.domain.exceptions import (
    AppointmentStatusTransitionError,
    InvalidAppointmentStateError,
    InvalidScheduleError,
)
from app.domains.appointment_scheduling.domain.value_objects import AppointmentId, AppointmentStatus, CountryISO


# ============================================================================
# Schedule Tests
# ============================================================================


@pytest.mark.unit
class TestSchedule:
    def _create(self, **overrides):
        values = {
            "schedule_id": 100,
            "center_id": 4,
            "specialty_id": 3,
            "medic_id": 2,
            "date": datetime.now(UTC) + timedelta(days=1),
        }
        values.update(overrides)
        return Schedule.create(**values)

    def test_create_valid_schedule(self):
        schedule = self._create()

        assert schedule.schedule_id == 100
        assert schedule.center_id == 4

    def test_past_date_is_rejected(self):
        with pytest.raises(InvalidScheduleError) as exc_info:
            self._create(date=datetime.now(UTC) - timedelta(hours=1))

        assert exc_info.value.message == "Invalid schedule: Schedule date cannot be in the past"
        assert exc_info.value.field == "date"

    @pytest.mark.parametrize(
        ("field", "wire_field"),
        [
            ("schedule_id", "scheduleId"),
            ("center_id", "centerId"),
            ("specialty_id", "specialtyId"),
            ("medic_id", "medicId"),
        ],
    )
    @pytest.mark.parametrize("bad_value", [0, -1, 1.5, "7", True])
    def test_invalid_ids_are_rejected(self, field, wire_field, bad_value):
        with pytest.raises(InvalidScheduleError) as exc_info:
            self._create(**{field: bad_value})

        assert exc_info.value.field == wire_field

    def test_non_datetime_date_is_rejected(self):
        with pytest.raises(InvalidScheduleError) as exc_info:
            self._create(date="2030-01-01")

        assert exc_info.value.field == "date"

    def test_naive_date_is_treated_as_utc(self):
        naive = datetime(2030, 1, 7, 10, 0)

        schedule = Schedule.restore(schedule_id=1, center_id=1, specialty_id=1, medic_id=1, date=naive)

        assert schedule.date.tzinfo is UTC

    def test_restore_accepts_past_dates(self):
        past = datetime(2020, 1, 1, tzinfo=UTC)

        schedule = Schedule.restore(schedule_id=1, center_id=1, specialty_id=1, medic_id=1, date=past)

        assert schedule.date == past

    def test_primitives_round_trip(self, sample_schedule):
        restored = Schedule.from_primitives(sample_schedule.to_primitives())

        assert restored == sample_schedule
        assert restored.date == sample_schedule.date


# ============================================================================
# Appointment Tests
# ============================================================================


@pytest.mark.unit
class TestAppointment:
    def test_create_is_pending(self, insured_pe, sample_schedule):
        appointment = Appointment.create(insured_pe, sample_schedule)

        assert appointment.status is AppointmentStatus.PENDING
        assert appointment.processed_at is None
        assert appointment.country_iso is CountryISO.PE
        assert appointment.insured_id.value == "00123"
        assert appointment.schedule_id == 100

    def test_mark_as_processed_sets_processed_at(self, pending_appointment):
        at = datetime(2030, 1, 1, tzinfo=UTC)

        pending_appointment.mark_as_processed(at)

        assert pending_appointment.is_processed()
        assert pending_appointment.processed_at == at
        assert pending_appointment.updated_at == at

    def test_mark_as_completed_keeps_processed_at(self, processed_appointment):
        processed_at = processed_appointment.processed_at

        processed_appointment.mark_as_completed()

        assert processed_appointment.is_completed()
        assert processed_appointment.processed_at == processed_at

    def test_processing_twice_is_rejected(self, processed_appointment):
        with pytest.raises(AppointmentStatusTransitionError) as exc_info:
            processed_appointment.mark_as_processed()

        assert exc_info.value.message == "Cannot transition from processed to processed."

    def test_completing_pending_is_rejected(self, pending_appointment):
        with pytest.raises(AppointmentStatusTransitionError):
            pending_appointment.mark_as_completed()

        assert pending_appointment.is_pending()

    def test_processed_status_requires_processed_at(self, insured_pe, sample_schedule):
        with pytest.raises(InvalidAppointmentStateError):
            Appointment(
                id=AppointmentId.generate(),
                insured=insured_pe,
                schedule=sample_schedule,
                status=AppointmentStatus.PROCESSED,
            )

    def test_pending_status_cannot_have_processed_at(self, pending_appointment):
        data = pending_appointment.to_primitives()
        data["processedAt"] = datetime.now(UTC).isoformat()

        with pytest.raises(InvalidAppointmentStateError):
            Appointment.from_primitives(data)

    def test_primitives_round_trip(self, processed_appointment):
        data = processed_appointment.to_primitives()

        restored = Appointment.from_primitives(data)

        assert restored == processed_appointment
        assert restored.status is AppointmentStatus.PROCESSED
        assert restored.processed_at == processed_appointment.processed_at
        assert restored.schedule == processed_appointment.schedule

    def test_to_primitives_uses_wire_names(self, pending_appointment):
        data = pending_appointment.to_primitives()

        assert data["countryISO"] == "PE"
        assert data["insuredId"] == "00123"
        assert data["status"] == "pending"
        assert data["processedAt"] is None
        assert data["schedule"]["scheduleId"] == 100

    def test_log_safe_dict_masks_insured_id(self, pending_appointment):
        assert pending_appointment.to_log_safe_dict()["insuredId"] == "00***"

    def test_equality_is_by_id(self, insured_pe, insured_cl, sample_schedule):
        first = Appointment.create(insured_pe, sample_schedule)
        same_id = Appointment(id=first.id, insured=insured_cl, schedule=sample_schedule)

        assert first == same_id
        assert first != Appointment.create(insured_pe, sample_schedule)


@pytest.mark.unit
def test_insured_from_primitives_normalizes():
    insured = Insured.from_primitives("pe", "123")

    assert insured.country_iso is CountryISO.PE
    assert insured.insured_id.value == "00123"
    assert insured.to_log_safe_dict() == {"countryISO": "PE", "insuredId": "00***"}
