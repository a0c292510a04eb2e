"""The fixed daily schedule of bookable slots."""

from dataclasses import dataclass
from datetime import time

from reservations.domain.value_objects import Period


@dataclass(frozen=True)
class Slot:
    """A bookable period of the school day."""

    id: int
    label: str
    start_time: time
    end_time: time
    period: Period


SCHEDULE_SLOTS: tuple[Slot, ...] = (
    Slot(1, "Class 1", time(7, 35), time(8, 25), Period.MORNING),
    Slot(2, "Class 2", time(8, 25), time(9, 10), Period.MORNING),
    Slot(3, "Class 3", time(9, 30), time(10, 20), Period.MORNING),
    Slot(4, "Class 4", time(10, 20), time(11, 10), Period.MORNING),
    Slot(5, "Class 5", time(11, 10), time(12, 0), Period.MORNING),
    Slot(6, "Class 6", time(13, 30), time(14, 20), Period.AFTERNOON),
    Slot(7, "Class 7", time(14, 20), time(15, 5), Period.AFTERNOON),
    Slot(8, "Class 8", time(15, 20), time(16, 10), Period.AFTERNOON),
    Slot(9, "Class 9", time(16, 10), time(17, 0), Period.AFTERNOON),
)

_SLOTS_BY_ID = {slot.id: slot for slot in SCHEDULE_SLOTS}


def get_slot(slot_id: int) -> Slot:
    """Return the catalog slot with this id.

    Raises:
        KeyError: If the id is not in the catalog.
    """
    return _SLOTS_BY_ID[slot_id]


def is_known_slot(slot_id: object) -> bool:
    return slot_id in _SLOTS_BY_ID
