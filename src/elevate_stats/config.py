import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from elevate_stats.models import AVG_CLIMB, DISTANCE, DURATION, ELEVATION_GAIN

# Load environment variables
load_dotenv(dotenv_path='.local.env')


# 1. Record Layouts (column positions inside a CSV row)
@dataclass(frozen=True)
class RecordLayout:
    started: int
    type: int
    duration: int
    distance: int
    elevation: int
    name: Optional[int] = None

    @property
    def has_name(self):
        return self.name is not None

    @property
    def width(self):
        positions = [self.started, self.type, self.duration, self.distance, self.elevation]
        if self.has_name:
            positions.append(self.name)
        return max(positions) + 1


WITH_NAME = RecordLayout(started=0, name=1, type=2, duration=3, distance=4, elevation=5)
WITHOUT_NAME = RecordLayout(started=0, type=1, duration=2, distance=3, elevation=4)


# 2. Report Variants
@dataclass(frozen=True)
class ReportVariant:
    """Which columns the export has and which tables the report contains."""
    name: str
    layout: RecordLayout
    aggregate_measures: tuple
    leaderboard_measures: tuple
    leaderboard_groups: bool = True

    @property
    def include_name(self):
        return self.layout.has_name


VARIANTS = {
    'full': ReportVariant(
        name='full',
        layout=WITH_NAME,
        aggregate_measures=(DISTANCE, ELEVATION_GAIN, DURATION),
        leaderboard_measures=(DISTANCE, ELEVATION_GAIN, AVG_CLIMB),
    ),
    'anonymous': ReportVariant(
        name='anonymous',
        layout=WITHOUT_NAME,
        aggregate_measures=(DISTANCE, ELEVATION_GAIN, DURATION),
        leaderboard_measures=(DISTANCE, ELEVATION_GAIN, AVG_CLIMB),
    ),
    'totals': ReportVariant(
        name='totals',
        layout=WITH_NAME,
        aggregate_measures=(DISTANCE, ELEVATION_GAIN, DURATION),
        leaderboard_measures=(),
        leaderboard_groups=False,
    ),
}

# 3. Output Settings
OUTPUT_FILE = os.getenv('ELEVATE_STATS_OUTPUT', 'stats.htm')
REPORT_VARIANT = os.getenv('ELEVATE_STATS_VARIANT', 'full').strip()

# Leaderboard length, "10" -> 10 (anything non-numeric is rejected by validate_config)
top_n_setting = os.getenv('ELEVATE_STATS_TOP_N', '10').strip()
TOP_N = int(top_n_setting) if top_n_setting.isdigit() else 0

INCLUDE_CHARTS = os.getenv('ELEVATE_STATS_CHARTS', 'false').strip().lower() in ('1', 'true', 'yes', 'on')


def get_variant(name=None):
    name = REPORT_VARIANT if name is None else name
    try:
        return VARIANTS[name]
    except KeyError:
        known = ", ".join(VARIANTS)
        raise ValueError(f"❌ ERROR: Unknown report variant '{name}' (expected one of: {known})") from None


def validate_config():
    if not OUTPUT_FILE:
        raise ValueError("❌ ERROR: ELEVATE_STATS_OUTPUT must not be empty.")
    if TOP_N < 1:
        raise ValueError("❌ ERROR: ELEVATE_STATS_TOP_N must be a positive integer.")
    get_variant()
