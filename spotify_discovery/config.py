from dotenv import load_dotenv
import os

load_dotenv()

# Spotify app (implicit grant only needs the client id)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8888/auth/callback"
)

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_API_BASE = os.getenv("SPOTIFY_API_BASE", "https://api.spotify.com/v1")

SCOPES = [
    "user-top-read",
]

# Optional market / region filter (ISO 3166-1 alpha-2, e.g. "FR")
SPOTIFY_MARKET = os.getenv("SPOTIFY_MARKET") or None

# Seconds, applied to every Spotify request
REQUEST_TIMEOUT_SECONDS = float(os.getenv("SPOTIFY_REQUEST_TIMEOUT", "10"))

# Taste signals
TOP_ITEMS_LIMIT = 5
TOP_ITEMS_TIME_RANGE = "short_term"

# Seeds
SEED_ARTIST_LIMIT = 1
SEED_TRACK_LIMIT = 1
MAX_TOTAL_SEEDS = 5
FALLBACK_GENRES = ("pop", "rock", "hip-hop", "electronic", "indie")

# Recommendations
RECOMMENDATION_LIMIT = 20
# Statuses meaning "these seeds cannot be satisfied" -> one retry with genres
SEED_RETRY_STATUSES = (400, 404)

# Playlist discovery
SEARCH_FANOUT_LIMIT = int(os.getenv("SEARCH_FANOUT_LIMIT", "5"))
PLAYLIST_SEARCH_LIMIT = 5
MIN_PLAYLIST_TRACKS = int(os.getenv("MIN_PLAYLIST_TRACKS", "20"))
CURATOR_OWNER_ID = "spotify"
SEARCH_MAX_WORKERS = 4
