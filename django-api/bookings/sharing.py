"""Shareable links that open the app on a given session."""

from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from django.conf import settings

SESSION_PARAM = "session"


def build_share_url(session_id: str, base_url: str | None = None) -> str:
    """Return ``base_url`` with ``session_id`` as the ``session`` query parameter.

    Existing query parameters are kept; an existing ``session`` value is replaced.
    """
    if base_url is None:
        base_url = settings.BOOKINGS_SHARE_BASE_URL
    scheme, netloc, path, query, fragment = urlsplit(base_url)
    params = [(key, value) for key, value in parse_qs(query).items() if key != SESSION_PARAM]
    params.append((SESSION_PARAM, [session_id]))
    return urlunsplit((scheme, netloc, path or "/", urlencode(params, doseq=True), fragment))


def session_id_from_url(url: str) -> str | None:
    """Session id carried by a share link, or None if it has none."""
    values = parse_qs(urlsplit(url).query).get(SESSION_PARAM)
    if not values or not values[0]:
        return None
    return values[0]
