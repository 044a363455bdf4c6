from collections.abc import Sequence

import pandas as pd

from column_layout import ColumnDefinition
from row_renderer import format_value

MAX_COL_WIDTH = 40
WIDTH_SAMPLE_ROWS = 200


class FrameRows(Sequence):
    """Positional, read-only view of a DataFrame; items are row Series."""

    def __init__(self, df: pd.DataFrame):
        self.frame = df

    def __len__(self):
        return len(self.frame)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self.frame.iloc[i] for i in range(*index.indices(len(self)))]
        return self.frame.iloc[index]


def as_dataset(data) -> Sequence:
    if data is None:
        return ()
    if isinstance(data, pd.DataFrame):
        return FrameRows(data)
    if isinstance(data, Sequence):
        return data
    return list(data)


def frame_row_key(item, index):
    """Use the DataFrame index label as the row identifier."""
    if isinstance(item, pd.Series):
        return item.name
    return index


def row_ids(data: Sequence, row_key=None) -> list:
    """Identifier of every row, in order."""
    if row_key is None:
        return list(range(len(data)))
    if row_key is frame_row_key and isinstance(data, FrameRows):
        return list(data.frame.index)
    return [row_key(data[i], i) for i in range(len(data))]


def _content_width(df: pd.DataFrame, pos: int, label) -> int:
    # sample the head only; a full column scan is too slow on big frames
    max_len = len(str(label))
    for v in df.iloc[:WIDTH_SAMPLE_ROWS, pos]:
        max_len = max(max_len, len(format_value(v)))
    return min(MAX_COL_WIDTH, max_len + 2)


def _unique_keys(labels):
    seen = set()
    keys = []
    for label in labels:
        key = base = str(label)
        n = 0
        while key in seen:
            n += 1
            key = f"{base}#{n}"
        seen.add(key)
        keys.append(key)
    return keys


def columns_from_frame(
    df: pd.DataFrame, fit_content: bool = True, min_width: int | None = None
) -> list[ColumnDefinition]:
    columns = []
    for pos, (label, key) in enumerate(zip(df.columns, _unique_keys(df.columns))):
        dtype = df.dtypes.iloc[pos]
        numeric = pd.api.types.is_numeric_dtype(dtype) and not pd.api.types.is_bool_dtype(
            dtype
        )
        columns.append(
            ColumnDefinition(
                key=key,
                header=str(label),
                render=lambda row, _index, pos=pos: row.iloc[pos],
                width=_content_width(df, pos, label) if fit_content else None,
                min_width=min_width,
                align="right" if numeric else "left",
            )
        )
    return columns
