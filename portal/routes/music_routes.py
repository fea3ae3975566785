from flask import Blueprint, current_app
from portal.utils.response_formatter import success_response
from portal.utils.title_parser import parse_title_from_track_url

bp = Blueprint("music", __name__, url_prefix="/api/v1/music")

TRACKS = [
    {"title": "Synthetic Drift", "genreTag": "Ambient Electronic"},
    {"title": "Agondonter Protocol", "genreTag": "Dark Synth"},
    {"title": "Northern Signal", "genreTag": "Nordic Ambient"},
    {"title": "Encrypted Frequencies", "genreTag": "Ethereal Synth"},
    {"title": "Collective Resonance", "genreTag": "Atmospheric"},
    {"title": "Digital Fjord", "genreTag": "Nordic Electronic"},
    {"title": "Phantom Lattice", "genreTag": "Experimental"},
    {"title": "Nebula Cascade", "genreTag": "Space Ambient"},
    {"title": "Cipher Bloom", "genreTag": "Synthwave"},
    {"title": "Polar Transmission", "genreTag": "Cold Wave"},
    {"title": "Recursive Horizon", "genreTag": "Glitch Ambient"},
    {"title": "Agondonter Hymn", "genreTag": "Choral Electronic"},
]


def track_card(track, default_url):
    url = track.get("url") or default_url
    return {
        "title": track.get("title") or parse_title_from_track_url(url),
        "genreTag": track["genreTag"],
        "artist": track.get("artist"),
        "url": url,
    }


@bp.route("/tracks", methods=["GET"])
def list_tracks():
    profile_url = current_app.config["TRACK_PROFILE_URL"]
    cards = [track_card(t, profile_url) for t in TRACKS]
    return success_response({"profileUrl": profile_url, "tracks": cards, "count": len(cards)})
