from dataclasses import dataclass, field

import pandas as pd

from elevate_stats.models import DISTANCE
from elevate_stats.process_data import ALL_COLUMN, TOTAL_ROW, ActivityIndex, cross_table, yearly_totals_by_type
from elevate_stats.rank_data import build_leaderboards

REPORT_TITLE = 'Activity stats'
CHART_TITLE = 'Distance per year (km)'


# ==============================================================================
# REPORT DOCUMENT
# ==============================================================================

@dataclass(frozen=True)
class Cell:
    text: str
    classes: tuple = ()
    header: bool = False


@dataclass(frozen=True)
class Heading:
    text: str
    level: int = 2


@dataclass(frozen=True)
class Table:
    columns: list
    rows: list


@dataclass(frozen=True)
class Chart:
    title: str
    data: pd.DataFrame


@dataclass
class Report:
    title: str
    blocks: list = field(default_factory=list)


# ==============================================================================
# FORMATTING
# ==============================================================================

def format_aggregate(value):
    return f"{value:,.0f}"


def format_single(value):
    return f"{value:.1f}"


def style_tag(column):
    return 'all' if column == ALL_COLUMN else column


# ==============================================================================
# ASSEMBLY
# ==============================================================================

def cross_table_blocks(index, measure):
    table = cross_table(index, measure)

    rows = []
    for label, values in table.iterrows():
        total_row = label == TOTAL_ROW
        row = [Cell(str(label), header=True)]
        for column, value in values.items():
            classes = ('number', 'total', style_tag(column)) if total_row else ('number', style_tag(column))
            row.append(Cell(format_aggregate(value), classes))
        rows.append(row)

    return [
        Heading(measure.aggregate_title),
        Table(columns=['\\'] + list(table.columns), rows=rows),
    ]


def leaderboard_table(activities, measure, include_name=True):
    columns = ['Measure', 'Date'] + (['Name'] if include_name else [])

    rows = []
    for activity in activities:
        tag = str(activity.type)
        row = [
            Cell(format_single(measure(activity)), ('number', tag)),
            Cell(activity.started.date().isoformat(), ('date', tag)),
        ]
        if include_name:
            row.append(Cell(activity.name, ('name', tag)))
        rows.append(row)
    return Table(columns=columns, rows=rows)


def leaderboard_blocks(leaderboard, n, include_name=True):
    measure = leaderboard.measure
    blocks = [
        Heading(f"Top {n} {measure.label} - {leaderboard.subject}"),
        leaderboard_table(leaderboard.all_time, measure, include_name),
    ]
    for year, top in leaderboard.by_year.items():
        blocks.append(Heading(str(year), level=3))
        blocks.append(leaderboard_table(top, measure, include_name))
    return blocks


def build_report(activities, variant, top_n=10, include_charts=False):
    """
    Folds aggregate tables and leaderboards into one report document.

    Order: title, optional distance chart, one cross table per aggregate
    measure, then per leaderboard measure every group (when enabled) followed
    by every type.
    """
    index = ActivityIndex(activities)
    report = Report(REPORT_TITLE, [Heading(REPORT_TITLE, level=1)])

    # --- 1. Chart ---
    if include_charts:
        if index.years:
            report.blocks.append(Chart(CHART_TITLE, yearly_totals_by_type(index, DISTANCE)))
        else:
            print("⚠️ Warning: No activities to chart.")

    # --- 2. Aggregate Tables ---
    for measure in variant.aggregate_measures:
        report.blocks.extend(cross_table_blocks(index, measure))

    # --- 3. Leaderboards ---
    leaderboards = build_leaderboards(
        index, variant.leaderboard_measures, include_groups=variant.leaderboard_groups, n=top_n
    )
    for leaderboard in leaderboards:
        report.blocks.extend(leaderboard_blocks(leaderboard, top_n, variant.include_name))

    return report
