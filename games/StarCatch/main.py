#!/usr/bin/env python3
"""Star Catch - Standalone entry point.

Wave at the stars in front of the camera to catch them. Without a camera
the game falls back to tapping and dragging.

Usage:
    python games/StarCatch/main.py
    python games/StarCatch/main.py --variant gesture --fullscreen
    python games/StarCatch/main.py --no-camera --seed 42
"""

import argparse
import os
import random
import sys

import pygame

# Add project root to path
_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _root not in sys.path:
    sys.path.insert(0, _root)

from starcatch.camera import OpenCVCamera
from starcatch.input.arbiter import InputArbiter
from starcatch.input.input_manager import InputManager
from starcatch.input.sources.pointer import PointerInputSource
from starcatch.logging import close_all_sinks, configure_logging, create_sink, get_logger, register_sink
from starcatch.motion import MotionDetector
from games.StarCatch import config
from games.StarCatch.config import ENGINE_PRESETS, DEFAULT_PRESET, get_engine_settings
from games.StarCatch.game_loop import GameLoop
from games.StarCatch.game_mode import StarCatchMode

log = get_logger('main')

SUMMARY_DISPLAY_MS = 1500


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Star Catch - catch the stars with motion or touch',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Camera with touch fallback (default)
  starcatch

  # Camera-only variant, fullscreen
  starcatch --variant gesture --fullscreen

  # Touch only, reproducible star placement
  starcatch --no-camera --seed 42
        """
    )

    parser.add_argument(
        '--variant',
        choices=sorted(ENGINE_PRESETS),
        default=DEFAULT_PRESET,
        help=f'Engine preset (default: {DEFAULT_PRESET})'
    )

    # Display settings
    parser.add_argument('--width', type=int, default=config.SCREEN_WIDTH,
                        help=f'Window width (default: {config.SCREEN_WIDTH})')
    parser.add_argument('--height', type=int, default=config.SCREEN_HEIGHT,
                        help=f'Window height (default: {config.SCREEN_HEIGHT})')
    parser.add_argument('--fullscreen', action='store_true',
                        help='Run in fullscreen mode')

    # Camera settings
    parser.add_argument('--camera-id', type=int, default=config.CAMERA_ID,
                        help=f'Camera device index (default: {config.CAMERA_ID})')
    parser.add_argument('--no-camera', action='store_true',
                        help='Skip the camera and play with touch/mouse only')

    # Engine overrides
    parser.add_argument('--sensitivity', type=float, default=None,
                        help='Per-cell motion threshold (summed RGB difference)')
    parser.add_argument('--max-stars', type=int, default=None,
                        help='Maximum stars on screen')
    parser.add_argument('--spawn-interval', type=float, default=None,
                        help='Seconds between spawns')
    parser.add_argument('--hit-radius', type=float, default=None,
                        help='Pointer hit radius as a fraction of the screen')
    parser.add_argument('--motion-threshold', type=int, default=None,
                        help='Flagged cells around a star needed for a motion hit')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for star placement and chime pitch')
    parser.add_argument('--no-audio', action='store_true',
                        help='Disable the collection chime')
    parser.add_argument('--log-level', default=None,
                        help='Console log level (TRACE, DEBUG, INFO, WARNING, ERROR, OFF)')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)

    try:
        settings = get_engine_settings(
            args.variant,
            sensitivity=args.sensitivity,
            max_stars=args.max_stars,
            spawn_interval=args.spawn_interval,
            pointer_hit_radius=args.hit_radius,
            motion_hit_threshold=args.motion_threshold,
        )
    except ValueError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2

    register_sink('session', create_sink('session'))

    pygame.init()
    if args.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption(f"Star Catch ({settings.name})")

    rng = random.Random(args.seed)
    width, height = screen.get_size()
    log.info("Starting '%s' preset at %dx%d", settings.name, width, height)

    game = StarCatchMode(settings, audio_enabled=config.AUDIO_ENABLED and not args.no_audio, rng=rng)
    detector = MotionDetector(
        grid_width=config.MOTION_GRID_WIDTH,
        grid_height=config.MOTION_GRID_HEIGHT,
        threshold=settings.sensitivity,
    )
    loop = GameLoop(
        screen,
        game,
        InputArbiter(),
        detector,
        InputManager(PointerInputSource(width, height)),
    )

    loop.init(
        camera_factory=lambda: OpenCVCamera(
            camera_id=args.camera_id,
            resolution=(config.CAMERA_WIDTH, config.CAMERA_HEIGHT),
        ),
        camera_enabled=config.CAMERA_ENABLED and not args.no_camera,
    )

    try:
        score = loop.run()
        if loop.frames > 0:
            game.render_summary(loop.screen)
            pygame.display.flip()
            pygame.time.wait(SUMMARY_DISPLAY_MS)
    finally:
        loop.stop()
        close_all_sinks()
        pygame.quit()

    print(f"Final score: {score:03d}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
