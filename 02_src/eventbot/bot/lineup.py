"""Festival lineup and site directions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Performance:
    band: str
    stage: str
    day: str
    start: str  # local time, HH:MM


LINEUP: tuple[Performance, ...] = (
    Performance("The Avalanche Drifters", "Main Stage", "Friday", "20:30"),
    Performance("Powder Kegs", "Lodge Tent", "Friday", "18:00"),
    Performance("Black Diamond", "Main Stage", "Saturday", "21:00"),
    Performance("Chairlift Serenade", "Lodge Tent", "Saturday", "16:45"),
    Performance("Mogul Mountain Band", "Summit Stage", "Saturday", "19:15"),
    Performance("Fresh Tracks", "Summit Stage", "Sunday", "14:00"),
    Performance("Apres Ski Orchestra", "Main Stage", "Sunday", "17:30"),
)


DIRECTIONS: dict[str, str] = {
    "Main Stage": "Follow the blue flags from the main gate; the Main Stage is at the bottom of the slope.",
    "Food Court": "The Food Court is next to the gondola station, left of the main gate.",
    "First Aid": "First Aid is behind the Lodge Tent. Look for the red cross, staff are there around the clock.",
    "Parking": "Parking lots P1 and P2 are a five minute walk down the access road. Shuttles leave every 15 minutes.",
}


def find_performances(query: str) -> list[Performance]:
    """Performances whose band name contains the query, case-insensitive."""
    needle = query.strip().casefold()
    if not needle:
        return []
    return [p for p in LINEUP if needle in p.band.casefold()]
