"""Date Helpers — DD-MM-YYYY wire format and age computation.

Invariants:
    - format_date always yields zero-padded DD-MM-YYYY
    - parse_date never raises: unparseable input returns None
    - calculate_age returns None for implausible birth dates (year < 1900,
      future dates, ages above 150)
"""

from datetime import date, datetime


def format_date(value: date | datetime | None) -> str | None:
    if value is None:
        return None
    return f"{value.day:02d}-{value.month:02d}-{value.year}"


def parse_date(value: str | None) -> date | None:
    """Parse DD-MM-YYYY first, then fall back to ISO (YYYY-MM-DD or full timestamp)."""
    if not value:
        return None
    value = value.strip()

    parts = value.split("-")
    if len(parts) == 3 and len(parts[0]) <= 2 and len(parts[2]) == 4:
        try:
            day, month, year = (int(p) for p in parts)
            return date(year, month, day)
        except ValueError:
            return None

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def calculate_age(date_of_birth: date | datetime | None, today: date | None = None) -> int | None:
    if date_of_birth is None:
        return None
    if isinstance(date_of_birth, datetime):
        date_of_birth = date_of_birth.date()
    today = today or date.today()

    if date_of_birth.year < 1900 or date_of_birth.year > today.year:
        return None

    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1

    if age < 0 or age > 150:
        return None
    return age
