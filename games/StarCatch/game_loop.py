"""
Star Catch game loop.

One GameLoop is built per session and driven once per display refresh.
Each iteration runs to completion before the next is scheduled:

    input events -> sample motion -> spawn -> hit-test/animate -> render

The loop has no terminal condition of its own; it runs until stop() is
called (window closed, ESC, or the hosting code leaving the game).
"""
import time
from enum import Enum
from typing import Optional

import pygame

from models import InputMode
from starcatch.input.arbiter import CameraFactory, InputArbiter
from starcatch.input.input_manager import InputManager
from starcatch.logging import emit_record, get_logger
from starcatch.motion import MotionDetector
from games.StarCatch import config
from games.StarCatch.game_mode import StarCatchMode

log = get_logger('game_loop')


class SessionState(Enum):
    """Lifecycle of a game session."""
    READY = "ready"        # start screen, waiting for the player
    PLAYING = "playing"
    STOPPED = "stopped"


class GameLoop:
    """Drives one game session.

    Attributes:
        screen: Display surface the game renders to
        game: Per-session game logic
        arbiter: Input mode selection and pointer signal
        detector: Motion detector fed with camera frames
        input_manager: Pointer/touch event collection
    """

    def __init__(
        self,
        screen: pygame.Surface,
        game: StarCatchMode,
        arbiter: InputArbiter,
        detector: MotionDetector,
        input_manager: InputManager,
        fps: int = config.FPS,
        clock: Optional[pygame.time.Clock] = None,
    ):
        self.screen = screen
        self.game = game
        self.arbiter = arbiter
        self.detector = detector
        self.input_manager = input_manager
        self.fps = fps
        self.clock = clock or pygame.time.Clock()

        self._state = SessionState.READY
        self._initialized = False
        self._running = False
        self._in_step = False
        self._frames = 0
        self._started_at: Optional[float] = None
        self._summary: Optional[dict] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frames(self) -> int:
        """Frames played in the current session."""
        return self._frames

    @property
    def summary(self) -> Optional[dict]:
        """Session summary, available after stop()."""
        return self._summary

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def init(self, camera_factory: Optional[CameraFactory] = None,
             camera_enabled: bool = True) -> InputMode:
        """Open the camera and fix the input mode for the session."""
        mode = self.arbiter.initialize(camera_factory, enabled=camera_enabled)
        self._initialized = True
        log.info("Input mode: %s%s", mode.value,
                 f" ({self.arbiter.fallback_reason})" if self.arbiter.fallback_reason else "")
        return mode

    def start(self) -> None:
        """Begin playing. No-op if already playing.

        Raises:
            RuntimeError: If init() has not been called or the loop was stopped
        """
        if self._state == SessionState.PLAYING:
            return
        if not self._initialized:
            raise RuntimeError("GameLoop.init() must be called before start()")
        if self._state == SessionState.STOPPED:
            raise RuntimeError("A stopped GameLoop cannot be restarted")

        self._reset_session()
        self._state = SessionState.PLAYING
        log.info("Session started")

    def reset(self) -> None:
        """Restart the current session from zero."""
        if self._state != SessionState.PLAYING:
            return
        self._reset_session()
        log.info("Session reset")

    def _reset_session(self) -> None:
        self.game.reset()
        self.detector.reset()
        self.arbiter.clear_pointer()
        self.input_manager.clear_events()
        self._frames = 0
        self._started_at = time.monotonic()

    def stop(self) -> None:
        """Stop rescheduling, release the camera and record a summary.

        The final score stays readable through game.get_score(). Safe to
        call more than once.
        """
        self._running = False
        if self._state == SessionState.STOPPED:
            return

        was_playing = self._state == SessionState.PLAYING
        self._state = SessionState.STOPPED
        self.arbiter.release()

        duration = time.monotonic() - self._started_at if self._started_at else 0.0
        stats = self.game.score.get_stats()
        self._summary = {
            'type': 'summary',
            'played': was_playing,
            'score': stats.score,
            'collected': stats.collected,
            'mode': self.arbiter.mode.value if self.arbiter.mode else None,
            'fallback_reason': self.arbiter.fallback_reason,
            'frames': self._frames,
            'duration': round(duration, 3),
        }
        emit_record('session', self._summary)
        log.info("Session stopped: score %d, %d stars, %d frames",
                 stats.score, stats.collected, self._frames)

    def run(self) -> int:
        """Run one iteration per display refresh until stopped.

        Returns:
            The final score

        Raises:
            RuntimeError: If the loop has already been stopped
        """
        if self._state == SessionState.STOPPED:
            raise RuntimeError("A stopped GameLoop cannot be restarted")
        if not self._initialized:
            self.init()
        self._running = True
        while self._running:
            self.clock.tick(self.fps)
            self.step()
        return self.game.get_score()

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def step(self) -> None:
        """Run exactly one iteration of the frame sequence.

        Raises:
            RuntimeError: If called while another iteration is in flight
        """
        if self._in_step:
            raise RuntimeError("GameLoop.step() is not re-entrant")
        self._in_step = True
        try:
            self._handle_events()

            if self._state == SessionState.PLAYING:
                frame = self.arbiter.read_frame()
                mask = self.detector.sample(frame)
                self.game.update(mask, self.arbiter)
                self.game.render(self.screen, frame, self.arbiter)
                self._frames += 1
            elif self._state == SessionState.READY:
                self.game.render_start_screen(self.screen, self.arbiter)
            else:
                return

            pygame.display.flip()
        finally:
            self._in_step = False

    def _handle_events(self) -> None:
        """Route pointer samples to the arbiter and handle window/keyboard events."""
        self.input_manager.update(0.0)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.stop()
                elif event.key == pygame.K_SPACE and self._state == SessionState.READY:
                    self.start()
                elif event.key == pygame.K_r:
                    self.reset()
            elif event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.get_surface() or self.screen
                self.input_manager.resize(event.w, event.h)

        pointer_events = self.input_manager.get_events()
        if self._state == SessionState.READY and pointer_events:
            self.start()
            return
        if self._state != SessionState.PLAYING:
            return
        for pointer_event in pointer_events:
            self.arbiter.record_pointer(pointer_event.position.x, pointer_event.position.y)
