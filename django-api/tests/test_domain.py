"""Unit tests for domain primitives and the pure availability/allocation logic.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import uuid
from datetime import date, datetime, time, timedelta, timezone

import pytest

from reservations.domain import (
    SCHEDULE_SLOTS,
    Period,
    Projector,
    ProjectorId,
    ProjectorStatus,
    ReservationId,
    Role,
    SlotSet,
    UserId,
    UserProfile,
)
from reservations.domain.allocation import (
    allocate,
    build_occupancy,
    choose_projector,
    find_self_conflict,
    order_candidates,
)
from reservations.domain.availability import compute_availability
from reservations.domain.errors import NoProjectorAvailableError, SelfConflictError
from reservations.domain.schedule import get_slot, is_known_slot
from tests.fakes import BASE_TIME, DAY, make_reservation


def projector(name, created_at=BASE_TIME, status=ProjectorStatus.AVAILABLE):
    return Projector(ProjectorId(uuid.uuid4()), name, status, created_at)


def user_id():
    return UserId(uuid.uuid4())


class TestSlotSet:
    """Tests for SlotSet value object."""

    def test_of_sorts_and_deduplicates(self):
        """SlotSet.of keeps each id once, ascending."""
        assert SlotSet.of([5, 3, 5, 1]).values == (1, 3, 5)

    def test_rejects_empty(self):
        """SlotSet raises ValueError when no slots are given."""
        with pytest.raises(ValueError):
            SlotSet.of([])

    def test_rejects_non_positive(self):
        """SlotSet raises ValueError for zero or negative ids."""
        with pytest.raises(ValueError):
            SlotSet.of([0, 2])

    def test_rejects_unsorted_direct_construction(self):
        """The raw constructor requires sorted unique values."""
        with pytest.raises(ValueError):
            SlotSet((3, 1))

    def test_rejects_booleans(self):
        """True is not a slot id."""
        with pytest.raises(ValueError):
            SlotSet((True,))

    def test_overlap(self):
        """overlap returns the shared ids in ascending order."""
        assert SlotSet.of([1, 2, 3]).overlap({3, 2, 9}) == (2, 3)


class TestIds:
    """Tests for the UUID-backed identifiers."""

    def test_from_string_valid_uuid(self):
        """ReservationId.from_string parses a valid UUID."""
        raw = uuid.uuid4()
        assert ReservationId.from_string(str(raw)).value == raw

    def test_from_string_invalid_uuid(self):
        """ProjectorId.from_string raises ValueError for garbage."""
        with pytest.raises(ValueError):
            ProjectorId.from_string("not-a-uuid")


class TestScheduleCatalog:
    """Tests for the fixed slot catalog."""

    def test_catalog_ids_are_ordered_and_unique(self):
        ids = [slot.id for slot in SCHEDULE_SLOTS]
        assert ids == sorted(set(ids))
        assert ids == list(range(1, 10))

    def test_slots_end_after_they_start(self):
        assert all(slot.start_time < slot.end_time for slot in SCHEDULE_SLOTS)

    def test_periods(self):
        """Slots 1-5 are morning, 6-9 afternoon."""
        assert {s.id for s in SCHEDULE_SLOTS if s.period is Period.MORNING} == {1, 2, 3, 4, 5}

    def test_lookup(self):
        assert get_slot(9).end_time == time(17, 0)
        assert is_known_slot(4)
        assert not is_known_slot(10)


class TestReservationExpiry:
    """Tests for the derived active/expired state."""

    def test_active_before_last_slot_ends(self):
        reservation = make_reservation([1, 2], user_id(), None)
        assert not reservation.is_expired(datetime(2030, 3, 4, 9, 9, tzinfo=timezone.utc))

    def test_expired_once_last_slot_ends(self):
        """Slot 2 ends at 09:10."""
        reservation = make_reservation([1, 2], user_id(), None)
        assert reservation.is_expired(datetime(2030, 3, 4, 9, 10, tzinfo=timezone.utc))

    def test_future_day_is_active(self):
        reservation = make_reservation([1], user_id(), None, on_date=date(2030, 3, 5))
        assert not reservation.is_expired(datetime(2030, 3, 4, 23, 0, tzinfo=timezone.utc))


class TestComputeAvailability:
    """Tests for compute_availability."""

    def test_one_entry_per_slot_in_catalog_order(self):
        result = compute_availability(DAY, user_id(), [projector("A")], [])
        assert [a.slot.id for a in result] == [s.id for s in SCHEDULE_SLOTS]

    def test_counts_reservations_touching_each_slot(self):
        me, other = user_id(), user_id()
        p1, p2 = projector("A"), projector("B")
        reservations = [
            make_reservation([3, 4], me, p1.id),
            make_reservation([4], other, p2.id),
        ]
        result = {a.slot.id: a for a in compute_availability(DAY, me, [p1, p2], reservations)}

        assert result[3].reserved_count == 1
        assert result[3].available_count == 1
        assert result[4].reserved_count == 2
        assert result[4].available_count == 0
        assert result[5].available_count == 2
        assert result[3].is_reserved_by_user
        assert not result[5].is_reserved_by_user

    def test_available_count_never_negative(self):
        """More reservations than active projectors clamps at zero."""
        p = projector("A")
        reservations = [make_reservation([1], user_id(), p.id) for _ in range(3)]
        result = compute_availability(DAY, user_id(), [p], reservations)
        assert all(0 <= a.available_count <= 1 for a in result)
        assert result[0].available_count == 0

    def test_orphaned_and_retired_bookings_free_capacity(self):
        """Bookings on deleted or unavailable projectors do not use up capacity."""
        active = projector("A")
        retired = projector("R", status=ProjectorStatus.UNAVAILABLE)
        me = user_id()
        reservations = [
            make_reservation([3], me, None),
            make_reservation([3], user_id(), retired.id),
        ]

        slot3 = compute_availability(DAY, me, [active], reservations, include_details=True)[2]

        assert (slot3.reserved_count, slot3.available_count) == (0, 1)
        assert slot3.is_reserved_by_user
        assert len(slot3.reservations) == 2

    def test_agrees_with_allocator(self):
        """A slot shows capacity exactly when the allocator can still place it."""
        p, q = projector("P", BASE_TIME), projector("Q", BASE_TIME + timedelta(days=1))
        gone = ProjectorId(uuid.uuid4())
        reservations = [
            make_reservation([1, 2], user_id(), p.id),
            make_reservation([2], user_id(), q.id),
            make_reservation([3, 4], user_id(), gone),
            make_reservation([4], user_id(), None),
            make_reservation([4], user_id(), q.id),
        ]
        newcomer = user_id()

        for entry in compute_availability(DAY, newcomer, [p, q], reservations):
            try:
                allocate(DAY, SlotSet.of([entry.slot.id]), newcomer, [p, q], reservations)
                placed = True
            except NoProjectorAvailableError:
                placed = False
            assert placed == (entry.available_count > 0), entry.slot.id

    def test_ignores_other_dates(self):
        p = projector("A")
        reservations = [make_reservation([1], user_id(), p.id, on_date=DAY + timedelta(days=1))]
        result = compute_availability(DAY, user_id(), [p], reservations)
        assert result[0].reserved_count == 0

    def test_no_details_unless_requested(self):
        result = compute_availability(DAY, user_id(), [], [])
        assert all(a.reservations is None for a in result)

    def test_details_name_user_and_projector(self):
        me = UserProfile(user_id(), "Ada", "ada@school.test", "Physics", Role.PROFESSOR)
        p = projector("Epson 1")
        reservation = make_reservation([2], me.id, p.id)

        result = compute_availability(
            DAY,
            me.id,
            [p],
            [reservation],
            include_details=True,
            users={me.id: me},
            projector_names={p.id: p.name},
        )

        (detail,) = result[1].reservations
        assert detail.reservation_id == reservation.id
        assert (detail.user_name, detail.user_area, detail.projector_name) == (
            "Ada",
            "Physics",
            "Epson 1",
        )
        assert result[0].reservations == ()

    def test_details_fall_back_when_lookups_miss(self):
        reservation = make_reservation([2], user_id(), None)
        result = compute_availability(DAY, user_id(), [], [reservation], include_details=True)
        (detail,) = result[1].reservations
        assert (detail.user_name, detail.user_area, detail.projector_name) == (
            "Unknown",
            "N/A",
            "Unknown",
        )


class TestAllocation:
    """Tests for the first-fit allocator."""

    def test_order_candidates_oldest_first(self):
        newer = projector("new", BASE_TIME + timedelta(hours=1))
        older = projector("old", BASE_TIME)
        assert order_candidates([newer, older]) == [older, newer]

    def test_order_candidates_missing_timestamp_is_oldest(self):
        dated = projector("dated", BASE_TIME)
        legacy = projector("legacy", None)
        assert order_candidates([dated, legacy]) == [legacy, dated]

    def test_order_candidates_ties_keep_input_order(self):
        first, second = projector("first"), projector("second")
        assert order_candidates([first, second]) == [first, second]
        assert order_candidates([second, first]) == [second, first]

    def test_order_candidates_drops_unavailable(self):
        broken = projector("broken", status=ProjectorStatus.UNAVAILABLE)
        assert order_candidates([broken]) == []

    def test_build_occupancy_merges_slots_per_projector(self):
        p = projector("A")
        occupancy = build_occupancy(
            [
                make_reservation([1], user_id(), p.id),
                make_reservation([4, 5], user_id(), p.id),
                make_reservation([2], user_id(), None),
            ]
        )
        assert occupancy == {p.id: {1, 4, 5}}

    def test_partial_overlap_disqualifies(self):
        """A projector free for 2 of 3 requested slots is not chosen."""
        p = projector("P", BASE_TIME)
        q = projector("Q", BASE_TIME + timedelta(days=1))
        occupancy = {p.id: {3}}
        assert choose_projector(SlotSet.of([1, 2, 3]), [p, q], occupancy) == q

    def test_choose_projector_none_when_all_busy(self):
        p = projector("P")
        assert choose_projector(SlotSet.of([1]), [p], {p.id: {1}}) is None

    def test_find_self_conflict_reports_shared_slots(self):
        me = user_id()
        reservations = [
            make_reservation([3], me, None),
            make_reservation([5], user_id(), None),
        ]
        assert find_self_conflict(SlotSet.of([3, 5]), me, reservations) == (3,)

    def test_allocate_prefers_earliest_registered(self):
        older = projector("older", BASE_TIME)
        newer = projector("newer", BASE_TIME + timedelta(days=3))
        chosen = allocate(DAY, SlotSet.of([3, 4]), user_id(), [newer, older], [])
        assert chosen == older

    def test_allocate_self_conflict(self):
        me = user_id()
        p = projector("A")
        existing = [make_reservation([3], me, p.id)]
        with pytest.raises(SelfConflictError) as excinfo:
            allocate(DAY, SlotSet.of([3, 5]), me, [p, projector("B")], existing)
        assert excinfo.value.slot_ids == (3,)
        assert "3" in excinfo.value.message

    def test_allocate_no_projector(self):
        p = projector("A")
        existing = [make_reservation([4], user_id(), p.id)]
        with pytest.raises(NoProjectorAvailableError):
            allocate(DAY, SlotSet.of([4]), user_id(), [p], existing)

    def test_allocate_with_no_projectors(self):
        with pytest.raises(NoProjectorAvailableError):
            allocate(DAY, SlotSet.of([1]), user_id(), [], [])
