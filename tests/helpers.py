# tests/helpers.py
from datetime import datetime, timedelta


class FakeClock:
    """Управляемые часы для детерминированных меток времени."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def naive(value: datetime | None) -> datetime | None:
    # SQLite отдаёт naive datetime, сравниваем без tzinfo
    return value.replace(tzinfo=None) if value is not None else None
