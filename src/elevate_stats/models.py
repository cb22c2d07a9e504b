from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, ROUND_UP, Decimal
from enum import Enum

SECONDS_PER_MINUTE = Decimal(60)
CLIMB_PRECISION = Decimal("0.01")


class ActivityType(Enum):
    RUN = "Run"
    RIDE = "Ride"
    VIRTUAL_RIDE = "VirtualRide"
    HIKE = "Hike"
    WALK = "Walk"
    KAYAKING = "Kayaking"
    ROWING = "Rowing"

    def __str__(self):
        return self.value


class ActivityTypeGroup(Enum):
    CYCLING = "Cycling"
    WALKING = "Walking"

    @property
    def types(self):
        return GROUP_MEMBERS[self]

    def __str__(self):
        return self.value


GROUP_MEMBERS = {
    ActivityTypeGroup.CYCLING: (ActivityType.RIDE, ActivityType.VIRTUAL_RIDE),
    ActivityTypeGroup.WALKING: (ActivityType.HIKE, ActivityType.WALK),
}


@dataclass(frozen=True)
class Activity:
    started: datetime
    type: ActivityType
    name: str
    duration_seconds: Decimal
    distance_km: Decimal
    elevation_gain_m: Decimal

    @property
    def year(self):
        return self.started.year

    @property
    def duration_minutes(self):
        # Partial minutes count as a whole minute
        return (self.duration_seconds / SECONDS_PER_MINUTE).quantize(Decimal(1), rounding=ROUND_UP)

    @property
    def avg_climb(self):
        """Metres climbed per kilometre, zero for activities without distance."""
        if self.distance_km == 0:
            return Decimal(0)
        return (self.elevation_gain_m / self.distance_km).quantize(CLIMB_PRECISION, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Measure:
    """A numeric view of an Activity used for sums and rankings."""
    key: str
    label: str
    aggregate_title: str
    attribute: str

    def __call__(self, activity):
        return getattr(activity, self.attribute)


DISTANCE = Measure('distance', 'distance (km)', 'Distance aggregates (km)', 'distance_km')
ELEVATION_GAIN = Measure('elevation_gain', 'elevation gain (m)', 'Elevation gain aggregates (m)', 'elevation_gain_m')
DURATION = Measure('duration', 'duration (min)', 'Duration aggregates (min)', 'duration_minutes')
AVG_CLIMB = Measure('avg_climb', 'climb (m/km)', 'Climb aggregates (m/km)', 'avg_climb')
