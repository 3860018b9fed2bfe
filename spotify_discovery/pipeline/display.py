from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from spotify_discovery.core import (
    Playlist,
    log_error,
    log_info,
    log_section,
    log_success,
    log_warning,
)


class Display(ABC):
    """
    Where the orchestrator hands its result.

    `set_loading(True)` / `set_loading(False)` bracket every run; in between
    exactly one of the render/show methods is called (none if cancelled).
    """

    @abstractmethod
    def set_loading(self, loading: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def render_playlists(self, playlists: List[Playlist]) -> None:
        raise NotImplementedError

    @abstractmethod
    def render_no_results(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_reauthenticate(self) -> None:
        """The credential was rejected; the user must log in again."""
        raise NotImplementedError

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Generic, retry-able failure."""
        raise NotImplementedError


class LoggingDisplay(Display):
    """CLI display: results go to the project logger."""

    def set_loading(self, loading: bool) -> None:
        if loading:
            log_info("Looking for playlists...")

    def render_playlists(self, playlists: List[Playlist]) -> None:
        log_section(f"{len(playlists)} playlists found")
        for p in playlists:
            owner = p.owner_display_name or p.owner_id
            log_info(f"{p.name} by {owner} ({p.track_count} tracks) {p.external_url}")
        log_success("Discovery complete.")

    def render_no_results(self) -> None:
        log_warning("No playlists found. Try again later or after listening a bit more.")

    def show_reauthenticate(self) -> None:
        log_error("Spotify session expired or invalid. Please authenticate again.")

    def show_error(self, message: str) -> None:
        log_error(f"Something went wrong talking to Spotify: {message}. Please retry.")


class RecordingDisplay(Display):
    """
    Keeps every call as (method, argument) so the API layer (and tests)
    can inspect what would have been shown.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []
        self.loading = False

    def set_loading(self, loading: bool) -> None:
        self.loading = loading
        self.calls.append(("set_loading", loading))

    def render_playlists(self, playlists: List[Playlist]) -> None:
        self.calls.append(("render_playlists", list(playlists)))

    def render_no_results(self) -> None:
        self.calls.append(("render_no_results", None))

    def show_reauthenticate(self) -> None:
        self.calls.append(("show_reauthenticate", None))

    def show_error(self, message: str) -> None:
        self.calls.append(("show_error", message))

    @property
    def last_render(self) -> Optional[str]:
        for name, _ in reversed(self.calls):
            if name != "set_loading":
                return name
        return None
