# services/maps.py
"""Google Maps links for activities, restaurants and hotels (no API key needed)."""

from urllib.parse import quote, urlencode

from core.display import is_drive_mode

_SEARCH_URL = "https://www.google.com/maps/search/"
_DIR_URL = "https://www.google.com/maps/dir/"
_EMBED_URL = "https://maps.google.com/maps"


def search_url(query: str) -> str:
    return f"{_SEARCH_URL}?{urlencode({'api': 1, 'query': query}, quote_via=quote)}"


def directions_url(destination: str, transport_mode: str) -> str:
    params = {
        "api": 1,
        "destination": destination,
        "travelmode": "driving" if is_drive_mode(transport_mode) else "transit",
    }
    return f"{_DIR_URL}?{urlencode(params, quote_via=quote)}"


def embed_url(query: str, zoom: int = 15, map_type: str = "") -> str:
    """URL for an <iframe> map preview centred on `query`."""
    return (
        f"{_EMBED_URL}?q={quote(query)}&t={map_type}&z={zoom}"
        "&ie=UTF8&iwloc=&output=embed"
    )
