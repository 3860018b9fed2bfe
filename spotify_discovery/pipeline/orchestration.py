"""Pipeline orchestrator: taste signals → seeds → recommendations → playlists.

States: IDLE → FETCHING_SIGNALS → RESOLVING → DISCOVERING → DONE, or FAILED
from any non-idle state. Stages run strictly one after the other; only the
two taste fetches (and the per-track searches) run concurrently inside
their own stage.

Unauthorized and UpstreamError end a run as FAILED with a classified
result; any other exception also leaves the run FAILED and is re-raised.
Empty recommendations and empty discovery end as DONE with an empty result.
"""

import threading
from typing import Any, Callable, Dict, Optional

from spotify_discovery.core import (
    CredentialMissing,
    PipelineBusy,
    PipelineCancelled,
    PipelineOutcome,
    PipelineResult,
    PipelineState,
    Unauthorized,
    UpstreamError,
    log_error,
    log_info,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from spotify_discovery.spotify import (
    Credential,
    SessionCredentialStore,
    SpotifyClient,
)

from .discovery import discover_playlists
from .display import Display
from .recommendations import fetch_recommendations
from .seeds import resolve_seeds
from .settings import DiscoverySettings
from .taste import fetch_taste_signals

ClientFactory = Callable[[Credential], SpotifyClient]


def default_client_factory(credential: Credential) -> SpotifyClient:
    return SpotifyClient(credential.access_token)


class PipelineOrchestrator:
    """
    Runs one discovery pipeline at a time.

    The credential store is passed to `run()` for each run; the orchestrator
    only reads it, and clears it when Spotify rejects the credential.
    A second `run()` while one is in flight raises PipelineBusy.
    """

    def __init__(
        self,
        display: Display,
        client_factory: ClientFactory = default_client_factory,
        settings: Optional[DiscoverySettings] = None,
    ) -> None:
        self.display = display
        self.client_factory = client_factory
        self.settings = settings or DiscoverySettings()
        self._run_lock = threading.Lock()
        self._state = PipelineState.IDLE

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def _enter(self, state: PipelineState) -> None:
        self._state = state
        log_step(f"Pipeline state: {state.value}")

    @staticmethod
    def _checkpoint(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise PipelineCancelled()

    def run(
        self,
        session: SessionCredentialStore,
        settings: Optional[DiscoverySettings] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> PipelineResult:
        if not self._run_lock.acquire(blocking=False):
            raise PipelineBusy("A discovery run is already in progress.")

        try:
            log_section("Playlist discovery")
            self.display.set_loading(True)
            try:
                return self._run_stages(
                    session, settings or self.settings, cancel_event
                )
            except Exception as exc:
                # Unclassified failure: end in a terminal state, then propagate
                self._enter(PipelineState.FAILED)
                log_error(f"Pipeline run crashed: {exc!r}")
                self.display.show_error("Unexpected error during discovery.")
                raise
            finally:
                self.display.set_loading(False)
        finally:
            self._run_lock.release()

    def _run_stages(
        self,
        session: SessionCredentialStore,
        settings: DiscoverySettings,
        cancel_event: Optional[threading.Event],
    ) -> PipelineResult:
        progress: Dict[str, Any] = {}

        try:
            self._checkpoint(cancel_event)
            self._enter(PipelineState.FETCHING_SIGNALS)
            credential = session.current_credential()
            if credential is None:
                raise CredentialMissing("No valid Spotify credential in session.")
            client = self.client_factory(credential)

            signals = fetch_taste_signals(client, settings)
            self._checkpoint(cancel_event)

            self._enter(PipelineState.RESOLVING)
            seeds = resolve_seeds(signals, settings)
            progress["used_signal_fallback"] = seeds.is_fallback
            progress["seeds"] = seeds

            batch = fetch_recommendations(client, seeds, settings)
            progress["seeds"] = batch.seeds_used
            progress["retried_with_fallback"] = batch.retried
            progress["recommended_count"] = len(batch.tracks)
            self._checkpoint(cancel_event)

            if not batch.tracks:
                self._enter(PipelineState.DONE)
                log_warning("No recommendations returned, nothing to search.")
                self.display.render_no_results()
                return PipelineResult(
                    state=PipelineState.DONE,
                    outcome=PipelineOutcome.NO_RECOMMENDATIONS,
                    **progress,
                )

            self._enter(PipelineState.DISCOVERING)
            report = discover_playlists(client, batch.tracks, settings)
            self._checkpoint(cancel_event)

        except (Unauthorized, CredentialMissing) as exc:
            self._enter(PipelineState.FAILED)
            log_error(f"Unauthorized: {exc}. Clearing stored credential.")
            session.clear()
            self.display.show_reauthenticate()
            return PipelineResult(
                state=PipelineState.FAILED,
                outcome=PipelineOutcome.UNAUTHORIZED,
                error_status=401,
                error_message=str(exc),
                **progress,
            )
        except UpstreamError as exc:
            self._enter(PipelineState.FAILED)
            log_error(f"Upstream error (status={exc.status}): {exc.message}")
            self.display.show_error(exc.message)
            return PipelineResult(
                state=PipelineState.FAILED,
                outcome=PipelineOutcome.UPSTREAM_ERROR,
                error_status=exc.status,
                error_message=exc.message,
                **progress,
            )
        except PipelineCancelled:
            self._enter(PipelineState.FAILED)
            log_warning("Pipeline run cancelled.")
            return PipelineResult(
                state=PipelineState.FAILED,
                outcome=PipelineOutcome.CANCELLED,
                **progress,
            )

        self._enter(PipelineState.DONE)
        if report.playlists:
            self.display.render_playlists(report.playlists)
            outcome = PipelineOutcome.PLAYLISTS
            log_success(f"Discovery done: {len(report.playlists)} playlists.")
        else:
            self.display.render_no_results()
            outcome = PipelineOutcome.NO_RESULTS
            log_info("Discovery done: no playlists matched.")

        return PipelineResult(
            state=PipelineState.DONE,
            outcome=outcome,
            playlists=report.playlists,
            tracks_searched=report.tracks_processed,
            search_failures=report.failures,
            **progress,
        )
