from datetime import date

from app.models.user import User
from app.models.weight import WeightEntry


def record_weight(user: User, weight: float, on_date: date) -> WeightEntry:
    """
    Записать вес пользователя на дату: обновляет current_weight и историю.
    Одна запись на дату, повторная запись перезаписывает вес на месте.
    """
    user.current_weight = weight

    for entry in user.weight_history:
        if entry.date == on_date:
            entry.weight = weight
            return entry

    entry = WeightEntry(date=on_date, weight=weight)
    user.weight_history.append(entry)
    return entry
