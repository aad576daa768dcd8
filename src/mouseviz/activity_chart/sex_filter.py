"""Sex filter conventions for the activity chart.

Single source of truth for the selector values so the loader, aggregator,
session and widget agree on them.
"""

# Sentinel value meaning "no filter": every sex category is shown.
SEX_FILTER_ALL = "all"

# The two sex categories a record may carry.
SEX_CATEGORIES: tuple[str, ...] = ("M", "F")

# Selector options in display order: value -> label.
SEX_FILTER_OPTIONS: dict[str, str] = {
    SEX_FILTER_ALL: "All",
    "M": "Male",
    "F": "Female",
}


def normalize_sex_filter(selection: object) -> str:
    """Return the canonical selector value for selection.

    None and the empty string mean SEX_FILTER_ALL. Category values are
    matched case-insensitively ("m" -> "M").

    Raises:
        ValueError: If selection is not a known selector value.
    """
    if selection is None:
        return SEX_FILTER_ALL
    s = str(selection).strip()
    if not s or s.lower() == SEX_FILTER_ALL:
        return SEX_FILTER_ALL
    if s.upper() in SEX_CATEGORIES:
        return s.upper()
    raise ValueError(
        f"Unknown sex filter {selection!r}, expected one of {list(SEX_FILTER_OPTIONS)}"
    )


def is_filtered(selection: str) -> bool:
    """True if selection restricts the data to one sex."""
    return normalize_sex_filter(selection) != SEX_FILTER_ALL


def format_sex_filter_display(selection: str) -> str:
    """Short label for the chart title: 'All', 'Male' or 'Female'."""
    return SEX_FILTER_OPTIONS[normalize_sex_filter(selection)]
