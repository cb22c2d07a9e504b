import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from elevate_stats.errors import MalformedRecordError


def read_rows(csv_file):
    """
    Reads an Elevate CSV export and returns its data rows as lists of text cells.
    The header row is consumed and discarded; columns are addressed by position.
    Blank lines are skipped, so rows are numbered by data row, not by file line.
    """
    try:
        df = pd.read_csv(csv_file, dtype=str, keep_default_na=False, index_col=False)
    except EmptyDataError:
        print(f"⚠️ Warning: {csv_file} is empty.")
        return []
    except ParserError as e:
        # e.g. a row with more fields than the header
        raise MalformedRecordError(f"Unreadable CSV {csv_file}: {e}") from e

    # Short rows are padded with NaN by pandas, keep every cell a string
    df = df.fillna('')
    rows = df.values.tolist()
    print(f"Loaded {len(rows)} rows from {csv_file}")
    return rows
