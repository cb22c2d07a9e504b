from dataclasses import dataclass, field

from elevate_stats.models import ActivityType, ActivityTypeGroup, Measure
from elevate_stats.process_data import group_by_year


def top_n(activities, measure, n=10):
    """
    The `n` activities with the highest `measure`, highest first.
    Activities with equal values keep their input (chronological) order.
    """
    return sorted(activities, key=measure, reverse=True)[:n]


def top_n_by_year(activities, measure, n=10):
    """Top `n` per year, years ascending; years without activities are left out."""
    return {
        year: top_n(year_activities, measure, n)
        for year, year_activities in group_by_year(activities).items()
    }


@dataclass(frozen=True)
class Leaderboard:
    subject: object
    measure: Measure
    all_time: list
    by_year: dict = field(default_factory=dict)


def build_leaderboard(index, subject, measure, n=10):
    """All-time and per-year top `n` for one activity type or type group."""
    types = subject.types if isinstance(subject, ActivityTypeGroup) else (subject,)
    activities = index.select(types)

    return Leaderboard(
        subject=subject,
        measure=measure,
        all_time=top_n(activities, measure, n),
        by_year=top_n_by_year(activities, measure, n),
    )


def build_leaderboards(index, measures, include_groups=True, n=10):
    """One leaderboard per measure and subject: groups first, then types."""
    subjects = list(ActivityTypeGroup) if include_groups else []
    subjects += list(ActivityType)
    return [build_leaderboard(index, subject, measure, n) for measure in measures for subject in subjects]
