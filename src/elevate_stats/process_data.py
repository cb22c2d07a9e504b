import re
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType

import pandas as pd

from elevate_stats.config import WITH_NAME
from elevate_stats.errors import MalformedRecordError
from elevate_stats.models import Activity, ActivityType, ActivityTypeGroup

ALL_COLUMN = 'All'
TOTAL_ROW = 'Total'

# "2023-01-01T08:00:00+01:00", "2023-01-01T08:00:00.250Z", "2023-01-01T08:00+01:00"
STARTED_PATTERN = re.compile(
    r'(?P<local>[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}(?::[0-9]{2})?)'
    r'(?:\.(?P<fraction>[0-9]{1,6}))?'
    r'(?P<offset>Z|[+-][0-9]{2}:[0-9]{2}(?::[0-9]{2})?)'
)
# Plain decimal or scientific notation, no grouping characters
DECIMAL_PATTERN = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')

# ==============================================================================
# 1. PARSING LAYER
# ==============================================================================

def parse_started(text):
    match = STARTED_PATTERN.fullmatch(text.strip())
    if match is None:
        raise MalformedRecordError(f"Start time '{text}' is not an ISO date-time with offset")

    iso = match['local']
    if match['fraction']:
        iso += '.' + match['fraction'].ljust(6, '0')
    iso += '+00:00' if match['offset'] == 'Z' else match['offset']
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        raise MalformedRecordError(f"Unparsable start time '{text}'") from None


def parse_duration(text):
    """
    Converts an "H:M:S" duration into whole seconds, e.g. "1:02:03" -> Decimal(3723).
    """
    parts = text.strip().split(':')
    if len(parts) != 3:
        raise MalformedRecordError(f"Duration '{text}' is not in H:M:S form")
    if not all(part.isascii() and part.isdigit() for part in parts):
        raise MalformedRecordError(f"Duration '{text}' has a non-numeric component")

    hours, minutes, seconds = (int(part) for part in parts)
    return Decimal(seconds + minutes * 60 + hours * 60 * 60)


def parse_decimal(text, field):
    if DECIMAL_PATTERN.fullmatch(text.strip()) is None:
        raise MalformedRecordError(f"Unparsable {field} '{text}'")
    return Decimal(text.strip())


def parse_type(text):
    try:
        return ActivityType(text)
    except ValueError:
        raise MalformedRecordError(f"Unknown activity type '{text}'") from None


def parse_activity(row, layout=WITH_NAME):
    if len(row) < layout.width:
        raise MalformedRecordError(f"Expected {layout.width} columns, got {len(row)}")

    return Activity(
        started=parse_started(row[layout.started]),
        type=parse_type(row[layout.type]),
        name=row[layout.name] if layout.has_name else '',
        duration_seconds=parse_duration(row[layout.duration]),
        distance_km=parse_decimal(row[layout.distance], 'distance'),
        elevation_gain_m=parse_decimal(row[layout.elevation], 'elevation gain'),
    )


def parse_activities(rows, layout=WITH_NAME):
    """
    Turns raw CSV rows into Activities, keeping input order.
    The first bad row aborts the whole parse; errors name the 1-based data row.
    """
    activities = []
    for number, row in enumerate(rows, start=1):
        try:
            activities.append(parse_activity(row, layout))
        except MalformedRecordError as e:
            raise MalformedRecordError(str(e), number) from e
    return tuple(activities)


# ==============================================================================
# 2. AGGREGATION LAYER
# ==============================================================================

def sum_measure(activities, measure):
    return sum((measure(activity) for activity in activities), Decimal(0))


def group_by_year(activities):
    """Splits activities by year, years ascending, input order kept inside a year."""
    groups = {}
    for activity in activities:
        groups.setdefault(activity.year, []).append(activity)
    return {year: tuple(groups[year]) for year in sorted(groups)}


class ActivityIndex:
    """
    Year, type and type x year views over one parsed activity list.
    Views are built once, read-only, and keep input order.
    """

    def __init__(self, activities):
        self.activities = tuple(activities)

        by_type = {}
        for activity in self.activities:
            by_type.setdefault(activity.type, []).append(activity)

        self.by_year = MappingProxyType(group_by_year(self.activities))
        self.by_type = MappingProxyType({t: tuple(subset) for t, subset in by_type.items()})
        self.by_type_and_year = MappingProxyType({
            t: MappingProxyType(group_by_year(subset)) for t, subset in by_type.items()
        })
        self.years = tuple(self.by_year)

    def _subset(self, activity_type, year):
        if year is None:
            return self.by_type.get(activity_type, ())
        return self.by_type_and_year.get(activity_type, {}).get(year, ())

    def select(self, types=None, year=None):
        """
        Activities of any of `types` started in `year`.
        None means no filter on that dimension.
        """
        if types is None:
            if year is None:
                return self.activities
            return self.by_year.get(year, ())

        subsets = [self._subset(activity_type, year) for activity_type in types]
        if len(subsets) == 1:
            return subsets[0]

        # Union by identity: equal rows stay distinct, a repeated type adds nothing
        chosen = {id(activity) for subset in subsets for activity in subset}
        return tuple(activity for activity in self.activities if id(activity) in chosen)

    def total(self, measure, types=None, year=None):
        return sum_measure(self.select(types, year), measure)


def _member_types(subject):
    if subject is None:
        return None
    if isinstance(subject, ActivityTypeGroup):
        return subject.types
    return (subject,)


def cross_table(index, measure):
    """
    Year x (groups, types, All) sums of one measure, plus a final Total row.
    Every cell is a Decimal.
    """
    subjects = list(ActivityTypeGroup) + list(ActivityType) + [None]
    columns = [str(s) for s in subjects[:-1]] + [ALL_COLUMN]

    rows = []
    for year in list(index.years) + [None]:
        rows.append([index.total(measure, _member_types(s), year) for s in subjects])

    labels = pd.Index(list(index.years) + [TOTAL_ROW], dtype=object)
    return pd.DataFrame(rows, index=labels, columns=columns, dtype=object)


def yearly_totals_by_type(index, measure):
    """Year x type sums, without group, All or Total entries."""
    table = cross_table(index, measure)
    return table.loc[list(index.years), [str(t) for t in ActivityType]]
