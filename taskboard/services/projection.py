"""Filtered, searched and sorted view over a task snapshot.

Works on tasks in their JSON shape (camelCase keys) as fetched by the client.
Pure: the input sequence and its items are never modified.
"""
import unicodedata
from datetime import date, datetime, time, timezone
from typing import Any, Iterable, List, Mapping, Optional

STATUS_ALL = "all"

SORT_CREATED_AT = "createdAt"
SORT_PRIORITY = "priority"
SORT_DUE_DATE = "dueDate"
SORT_TITLE = "title"

PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _as_datetime(value: Any) -> Optional[datetime]:
    """Coerce an ISO string, date or datetime to an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime) and isinstance(value, date):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _matches(task: Mapping[str, Any], status_filter: str, needle: str) -> bool:
    title = task.get("title")
    # Malformed entries without a title never show up
    if not title:
        return False

    if status_filter != STATUS_ALL and task.get("status") != status_filter:
        return False

    if not needle:
        return True
    description = task.get("description") or ""
    return needle in title.lower() or needle in description.lower()


def _due_date_key(task):
    due = _as_datetime(task.get("dueDate"))
    return (due is None, due or _EPOCH)


def _fold(text: str) -> str:
    """Case- and accent-insensitive form of text for collation."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _title_key(task):
    title = task["title"]
    return (_fold(title), title.casefold(), title)


def project_tasks(
    tasks: Iterable[Mapping[str, Any]],
    status_filter: str = STATUS_ALL,
    search_term: str = "",
    sort_by: str = SORT_CREATED_AT,
) -> List[Mapping[str, Any]]:
    """Return the visible tasks in display order.

    Sorting is stable. Unknown sort keys fall back to newest first.
    """
    needle = (search_term or "").lower()
    visible = [
        task for task in (tasks or [])
        if task and _matches(task, status_filter or STATUS_ALL, needle)
    ]

    if sort_by == SORT_PRIORITY:
        return sorted(
            visible,
            key=lambda t: PRIORITY_RANK.get(t.get("priority"), len(PRIORITY_RANK)),
        )
    if sort_by == SORT_DUE_DATE:
        return sorted(visible, key=_due_date_key)
    if sort_by == SORT_TITLE:
        return sorted(visible, key=_title_key)

    return sorted(
        visible,
        key=lambda t: _as_datetime(t.get("createdAt")) or _EPOCH,
        reverse=True,
    )
