import pytest

from elevate_stats.process_data import parse_activities

# [startedAt, name, type, duration, distanceKm, elevationGainM]
SAMPLE_ROWS = [
    ["2022-03-05T09:00:00+01:00", "Morning run", "Run", "0:50:00", "10.0", "80"],
    ["2022-07-10T07:30:00+02:00", "Alps", "Ride", "4:00:00", "90.5", "1800"],
    ["2022-12-24T10:00:00Z", "Zwift", "VirtualRide", "1:00:00", "30.0", "300"],
    ["2023-01-01T08:00:00Z", "New year", "Run", "0:30:00", "5.0", "50"],
    ["2023-04-15T11:00:00+02:00", "Ridge", "Hike", "5:30:30", "14.2", "1100"],
    ["2023-06-01T08:00:00Z", "Commute", "Ride", "1:00:00", "20.0", "100"],
    ["2023-08-20T06:00:00+02:00", "Lake", "Kayaking", "2:00:00", "8.0", "0"],
    ["2023-09-01T18:00:00+02:00", "Park", "Walk", "0:45:10", "4.3", "20"],
]

# [startedAt, type, duration, distanceKm, elevationGainM]
SCENARIO_ROWS = [
    ["2023-01-01T08:00:00Z", "Run", "0:30:00", "5.0", "50"],
    ["2023-06-01T08:00:00Z", "Ride", "1:00:00", "20.0", "100"],
]


@pytest.fixture
def sample_activities():
    return parse_activities(SAMPLE_ROWS)


@pytest.fixture
def write_csv(tmp_path):
    def _write(rows, header=("startedAt", "name", "type", "duration", "distance", "elevationGain"), name="export.csv"):
        lines = [",".join(header)] + [",".join(row) for row in rows]
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
