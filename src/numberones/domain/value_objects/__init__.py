"""Value objects: date codec and text normalization."""

from numberones.domain.value_objects.chart_dates import (
    MONTHS,
    date_key,
    iter_dates,
    next_day,
    pad2,
    parse_iso_date,
    parse_long_date,
)
from numberones.domain.value_objects.text_normalization import to_sentence_case

__all__ = [
    "MONTHS",
    "date_key",
    "iter_dates",
    "next_day",
    "pad2",
    "parse_iso_date",
    "parse_long_date",
    "to_sentence_case",
]
