"""
Playback States - The transport state machine.

    IDLE ──play──▶ PLAYING ──pause──▶ PAUSED
                     │  ▲               │
          end, loop  └──┘◀────play──────┘
                     │
          end, once  ▼
                  FINISHED ──play──▶ PLAYING (restart at 0)

    stop: any state ──▶ IDLE

Exactly one state is current at any time. Only the coordinator
moves between them.
"""

from __future__ import annotations

from enum import Enum


class PlaybackState(Enum):
    """Transport state of a playback session."""
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"

    @property
    def label(self) -> str:
        """Short human-readable status."""
        return _LABELS[self]

    @property
    def is_active(self) -> bool:
        """Playing or paused, i.e. a run is in progress."""
        return self in (PlaybackState.PLAYING, PlaybackState.PAUSED)


_LABELS: dict[PlaybackState, str] = {
    PlaybackState.IDLE: "Ready",
    PlaybackState.PLAYING: "Playing",
    PlaybackState.PAUSED: "Paused",
    PlaybackState.FINISHED: "Complete",
}


# Valid state transitions (from -> to). PLAYING -> PLAYING is a loop restart.
VALID_TRANSITIONS: dict[PlaybackState, set[PlaybackState]] = {
    PlaybackState.IDLE: {PlaybackState.PLAYING, PlaybackState.IDLE},
    PlaybackState.PLAYING: {
        PlaybackState.PAUSED,
        PlaybackState.IDLE,
        PlaybackState.FINISHED,
        PlaybackState.PLAYING,
    },
    PlaybackState.PAUSED: {PlaybackState.PLAYING, PlaybackState.IDLE},
    PlaybackState.FINISHED: {PlaybackState.PLAYING, PlaybackState.IDLE},
}


def is_valid_transition(from_state: PlaybackState, to_state: PlaybackState) -> bool:
    """Check if a state transition is valid."""
    return to_state in VALID_TRANSITIONS.get(from_state, set())
