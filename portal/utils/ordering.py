from datetime import datetime, timezone


def _timestamp_key(message):
    value = message.get("timestamp")
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return datetime.min.replace(tzinfo=timezone.utc)


def sort_thread(messages):
    """Single conversation, oldest first. Equal timestamps keep insertion order."""
    return sorted(messages, key=_timestamp_key)


def merge_feed(grouped):
    """Flatten [(project_id, messages), ...] into one feed, newest first.

    Each message in the result carries its projectId.
    """
    flat = [
        dict(message, projectId=project_id)
        for project_id, messages in grouped
        for message in messages
    ]
    return sorted(flat, key=_timestamp_key, reverse=True)
