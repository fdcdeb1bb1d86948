"""
Domain — 人格輪替策略（純函式，無 I/O）。
每隔 rotation_interval 分鐘，啟用中的人格依部署順序移至下一位（循環）。
"""

from datetime import datetime, timedelta


def next_rotation_at(rotated_at: datetime | None, interval_minutes: int) -> datetime | None:
    """Return when the next rotation is due, or None if the clock never started."""
    if rotated_at is None:
        return None
    return rotated_at + timedelta(minutes=interval_minutes)


def is_rotation_due(
    rotated_at: datetime | None, interval_minutes: int, now: datetime
) -> bool:
    """True once at least ``interval_minutes`` have elapsed since ``rotated_at``.

    A clock that has never started is not due; the caller starts it instead.
    Intervals below one minute are treated as one minute.
    """
    due_at = next_rotation_at(rotated_at, max(interval_minutes, 1))
    return due_at is not None and now >= due_at


def next_persona_id(ordered_ids: list[str], current_id: str | None) -> str | None:
    """
    Pick the persona that follows ``current_id`` in deployment order.

    Args:
        ordered_ids: persona ids in rotation order
        current_id: currently selected persona, may be None or unknown

    Returns:
        The next id (wrapping around), the first id when ``current_id`` is
        None or no longer present, or None when there are no personas.
    """
    if not ordered_ids:
        return None
    if current_id not in ordered_ids:
        return ordered_ids[0]
    idx = ordered_ids.index(current_id)
    return ordered_ids[(idx + 1) % len(ordered_ids)]
