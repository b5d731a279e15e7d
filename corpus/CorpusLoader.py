# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-10
# Description: CorpusLoader
# -----------------------------------------------------------------------------
import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from errors.DenseSearchErrors import ColumnMissingError, SourceUnreadableError
from settings import DEFAULT_MAX_ROWS
from utility.logging_utils import get_class_logger

ColumnSelector = Union[int, str]


class CorpusLoader:
    """
    Reads the text corpus from a CSV file (header row expected).

    Only the first `max_rows` data rows are read; anything beyond that is
    dropped silently to bound the size of the offline job. Blank cells are
    skipped so every returned record is a non-empty string. The position of a
    record in the returned list is its row id.
    """

    def __init__(self, *, max_rows: int = DEFAULT_MAX_ROWS, logger: Optional[logging.Logger] = None):
        if max_rows < 1:
            raise ValueError(f"max_rows must be >= 1, got {max_rows}")
        self.max_rows = max_rows
        self.logger = logger or get_class_logger(self.__class__)

    def load(self, path: Union[str, Path], column: ColumnSelector = 0) -> List[str]:
        path = Path(path)
        self.logger.info("Loading corpus from '%s' (column=%r, max_rows=%d)", path, column, self.max_rows)

        try:
            df = pd.read_csv(
                path,
                dtype=str,
                nrows=self.max_rows,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding="utf-8",
                engine="python",
            )
        except FileNotFoundError as e:
            raise SourceUnreadableError(f"Corpus source not found: {path}", path=str(path)) from e
        except pd.errors.EmptyDataError as e:
            raise SourceUnreadableError(f"Corpus source is empty: {path}", path=str(path)) from e
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            raise SourceUnreadableError(f"Cannot read corpus source {path}: {e}", path=str(path)) from e

        series = self._select_column(df, column)

        texts: List[str] = []
        skipped = 0
        for offset, value in enumerate(series.tolist()):
            # The python engine leaves a short row's missing field as NaN; an empty field stays ""
            if not isinstance(value, str):
                raise ColumnMissingError(
                    f"Row {offset + 1} has no value for column {column!r}",
                    column=column,
                    row_number=offset + 1,
                )
            if not value.strip():
                skipped += 1
                self.logger.debug("Skipping blank value at row %d", offset + 1)
                continue
            texts.append(value)

        self.logger.info(
            "%d text records loaded from '%s' (%d rows read, %d blank skipped)",
            len(texts),
            path,
            len(series),
            skipped,
        )
        return texts

    @staticmethod
    def _select_column(df: pd.DataFrame, column: ColumnSelector) -> pd.Series:
        if isinstance(column, int):
            if column < 0 or column >= len(df.columns):
                raise ColumnMissingError(
                    f"Column index {column} not present (source has {len(df.columns)} columns)",
                    column=column,
                )
            return df.iloc[:, column]

        if column not in df.columns:
            raise ColumnMissingError(
                f"Column {column!r} not present in header {list(df.columns)}",
                column=column,
            )
        return df[column]
