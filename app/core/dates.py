"""
Работа с календарными датами тренировок и записей веса.

Даты хранятся как ``date``, но в старых записях и на фронте встречаются
текстовые метки вида "Monday, September 15, 2025" или ISO "2025-09-15".
"""
from datetime import date, datetime
from typing import Union

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_LABEL_FORMATS = (
    "%Y-%m-%d",
    "%A, %B %d, %Y",
    "%A %B %d, %Y",
    "%B %d, %Y",
)


def day_name(value: date) -> str:
    return DAY_NAMES[value.weekday()]


def format_date(value: date) -> str:
    """Метка даты в формате фронта: "Monday, September 15, 2025"."""
    return f"{day_name(value)}, {value.strftime('%B')} {value.day}, {value.year}"


def parse_calendar_date(value: Union[date, datetime, str]) -> date:
    """Привести дату или текстовую метку к ``date``. Нераспознанное значение -> ValueError."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = " ".join(value.split())
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        for fmt in _LABEL_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    raise ValueError(f"Не удалось распознать дату: {value!r}")
