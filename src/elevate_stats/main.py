import os
import sys

from elevate_stats import config, process_data, publish_data, read_data, report
from elevate_stats.errors import InputNotFound, InvalidArguments


def validate_arguments(args):
    """Returns the CSV path from the command line arguments."""
    if len(args) != 1:
        raise InvalidArguments("Need one argument: the CSV exported from Elevate")
    csv_file = args[0]
    if not os.path.isfile(csv_file):
        raise InputNotFound(f"{os.path.abspath(csv_file)} is not a file")
    return csv_file


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv

    # 1. Validate Arguments & Config
    try:
        csv_file = validate_arguments(args)
        config.validate_config()
        variant = config.get_variant()
    except (InvalidArguments, InputNotFound, ValueError) as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    print("--- Starting Elevate Stats Report ---")
    print(f"Variant: {variant.name}, Top {config.TOP_N}")

    # 2. Read & Parse (a malformed row aborts the run)
    rows = read_data.read_rows(csv_file)
    activities = process_data.parse_activities(rows, variant.layout)

    # 3. Aggregate & Rank
    print(f"Processing {len(activities)} activities...")
    stats_report = report.build_report(
        activities, variant, top_n=config.TOP_N, include_charts=config.INCLUDE_CHARTS
    )

    # 4. Publish
    publish_data.publish_report(stats_report, config.OUTPUT_FILE)

    print("\nReport complete.")


if __name__ == "__main__":
    main()
