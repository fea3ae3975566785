import re
from urllib.parse import urlsplit

UNKNOWN_TRACK_TITLE = "Ukjent spor"

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def _title_case(words):
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def parse_title_from_track_url(url: str) -> str:
    """Derive a display title from a track-share URL.

    /song/<slug-uuid> gives the slug in Title Case without its trailing UUID,
    /s/<id> gives the id untouched, anything else falls back to the last path
    segment. Unparseable input gives UNKNOWN_TRACK_TITLE.
    """
    try:
        parsed = urlsplit(url)
        if not parsed.scheme:
            return UNKNOWN_TRACK_TITLE
    except (TypeError, ValueError, AttributeError):
        return UNKNOWN_TRACK_TITLE

    parts = [p for p in parsed.path.split("/") if p]

    if len(parts) > 1 and parts[0] == "song":
        segments = parts[1].split("-")
        # matching is by shape only, the trailing 5 segments are not checksummed
        if len(segments) >= 5 and UUID_PATTERN.match("-".join(segments[-5:])):
            segments = segments[:-5]
        if segments:
            return _title_case(segments)

    if len(parts) > 1 and parts[0] == "s":
        return parts[1]

    if not parts:
        return UNKNOWN_TRACK_TITLE
    return _title_case(parts[-1].split("-"))
