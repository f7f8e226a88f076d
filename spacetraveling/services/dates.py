import datetime
from typing import Union

from spacetraveling.errors import FormatError

# Brazilian Portuguese abbreviated month names, as rendered on the site.
PT_BR_MONTHS = (
    "jan",
    "fev",
    "mar",
    "abr",
    "mai",
    "jun",
    "jul",
    "ago",
    "set",
    "out",
    "nov",
    "dez",
)


def parse_publication_date(
    value: Union[str, datetime.date, None],
) -> datetime.date:
    """Parse a CMS timestamp such as ``2021-03-25T19:25:28+0000``."""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value
    if not value or not isinstance(value, str):
        raise FormatError(f"Missing publication date: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.datetime.strptime(text, "%Y-%m-%dT%H:%M:%S%z")
    except ValueError as e:
        raise FormatError(f"Unparseable publication date: {value!r}") from e


def format_publication_date(value: Union[str, datetime.date, None]) -> str:
    """Format as ``dd MMM yyyy`` with pt-BR month names, e.g. ``25 mar 2021``."""
    date = parse_publication_date(value)
    return f"{date.day:02d} {PT_BR_MONTHS[date.month - 1]} {date.year:04d}"
