# museum/domain/slots.py
MORNING = "Morning (10:30 AM - 12:00 PM)"
AFTERNOON = "Afternoon (02:30 PM - 04:00 PM)"

SLOT_CAPACITY = {
    MORNING: 20,
    AFTERNOON: 15,
}


def slot_capacity(slot: str) -> int | None:
    """Pojemnosc slotu; None dla nieznanej etykiety (bez limitu)."""
    return SLOT_CAPACITY.get(slot)


def remaining_capacity(capacity: int | None, booked: int) -> int | None:
    if capacity is None:
        return None
    return max(capacity - booked, 0)
