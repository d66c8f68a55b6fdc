#!/usr/bin/env python3
"""
ExpoHub Arcade Launcher

Plays one game in a pygame window with mouse input. Settings and best
scores are read from the user data directory (EXPOHUB_DATA_DIR overrides).

Uses the game registry for auto-discovery. Game-specific arguments are
read from each game class's ARGUMENTS list.

Usage:
    # List available games
    python hub.py --list

    # Play a game
    python hub.py flappydrone
    python hub.py starcatcher --max-time 90
    python hub.py memorymatch --difficulty hard

    # See game-specific options
    python hub.py connectfour --help

    # With custom resolution
    python hub.py flappydrone --resolution 450x800
"""

import argparse
import sys

import pygame

from expohub.games.scoring import ScoreEngine
from expohub.logging import close_all_sinks, configure_logging, get_logger
from expohub.storage import BestScoreStore, SettingsStore
from games.registry import get_registry

log = get_logger('hub')

FPS = 60


def _add_game_arguments(parser: argparse.ArgumentParser, game_arguments) -> None:
    """Turn ARGUMENTS definitions into argparse options."""
    game_args_added = set()
    for arg_def in game_arguments:
        arg_name = arg_def['name']
        # Avoid duplicates
        if arg_name in game_args_added:
            continue
        game_args_added.add(arg_name)

        # Build kwargs for add_argument
        kwargs = {}
        if 'type' in arg_def:
            kwargs['type'] = arg_def['type']
        if 'default' in arg_def:
            kwargs['default'] = arg_def['default']
        if 'help' in arg_def:
            kwargs['help'] = arg_def['help']
        if 'action' in arg_def:
            kwargs['action'] = arg_def['action']
            kwargs.pop('type', None)  # action and type are mutually exclusive
        if 'choices' in arg_def:
            kwargs['choices'] = arg_def['choices']

        parser.add_argument(arg_name, **kwargs)


def main():
    """Main entry point for the arcade launcher."""

    registry = get_registry()
    available_games = registry.list_games()

    # Phase 1: Parse just enough to identify the game
    # Use parse_known_args to allow unknown game-specific args through
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument('game', nargs='?', choices=available_games)
    pre_parser.add_argument('--list', '-l', action='store_true')
    pre_parser.add_argument('--help', '-h', action='store_true')

    pre_args, remaining = pre_parser.parse_known_args()

    # Phase 2: Build full parser with game-specific arguments
    parser = argparse.ArgumentParser(
        description='ExpoHub Arcade - play a game with the mouse',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available games: {', '.join(available_games)}

Examples:
  python hub.py --list                  # List available games
  python hub.py flappydrone             # Play Flappy Drone
  python hub.py starcatcher --lives 5
  python hub.py <game> --help           # See game-specific options
        """
    )

    parser.add_argument(
        'game',
        nargs='?',
        choices=available_games,
        help='Game to play'
    )

    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='List all available games and exit'
    )

    parser.add_argument(
        '--resolution', '-r',
        type=str,
        default='1280x720',
        help='Window resolution as WIDTHxHEIGHT (default: 1280x720)'
    )

    parser.add_argument(
        '--fullscreen', '-f',
        action='store_true',
        help='Run in fullscreen mode'
    )

    parser.add_argument(
        '--reset-settings',
        action='store_true',
        help='Restore default settings before starting'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['trace', 'debug', 'info', 'warning', 'error', 'critical', 'off'],
        help='Console log level (overrides EXPOHUB_LOG_LEVEL)'
    )

    # Add game-specific arguments if a game was specified
    if pre_args.game:
        _add_game_arguments(parser, registry.get_game_arguments(pre_args.game))

    # Now parse everything
    args = parser.parse_args()

    if args.log_level:
        configure_logging(level=args.log_level)

    # Handle --list
    if args.list:
        print("\nAvailable Games")
        print("=" * 50)
        for slug in available_games:
            info = registry.get_game_info(slug)
            if info:
                print(f"\n  {slug}")
                print(f"    Name: {info.name}")
                print(f"    Description: {info.description}")
                print(f"    Version: {info.version}")

                # Show available arguments
                game_args = registry.get_game_arguments(slug)
                if game_args:
                    arg_names = [a['name'] for a in game_args]
                    print(f"    Options: {', '.join(arg_names)}")
        print()
        return 0

    # Require a game
    if args.game is None:
        parser.print_help()
        return 1

    # Parse resolution
    try:
        width, height = args.resolution.split('x')
        display_width = int(width)
        display_height = int(height)
    except ValueError:
        print(f"Invalid resolution format: {args.resolution}")
        print("Expected format: WIDTHxHEIGHT (e.g., 1920x1080)")
        return 1

    # Stores
    settings_store = SettingsStore()
    settings = settings_store.reset() if args.reset_settings else settings_store.load()
    scores = ScoreEngine(BestScoreStore())

    # Initialize pygame
    pygame.init()

    if args.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        display_width, display_height = screen.get_size()
    else:
        screen = pygame.display.set_mode((display_width, display_height))

    game_info = registry.get_game_info(args.game)
    pygame.display.set_caption(f"{game_info.name} - ExpoHub")
    print("=" * 60)
    print(f"ExpoHub: {game_info.name}")
    print("=" * 60)
    print(f"Resolution: {display_width}x{display_height}")
    print("Input: Mouse")
    print()

    # Collect game kwargs from all parsed arguments
    # Skip the common launcher arguments
    skip_args = {'game', 'list', 'resolution', 'fullscreen', 'reset_settings', 'log_level'}
    game_kwargs = {
        k: v for k, v in vars(args).items()
        if k not in skip_args and v is not None
    }

    if game_kwargs:
        print("Game options:")
        for k, v in game_kwargs.items():
            print(f"  --{k.replace('_', '-')}: {v}")
        print()

    # Create game
    try:
        game = registry.create_game(
            args.game, display_width, display_height,
            settings=settings, scores=scores, **game_kwargs
        )
    except Exception as e:
        log.exception("Failed to create game %s: %s", args.game, e)
        pygame.quit()
        return 1

    game.attach(screen)

    # Create input manager with mouse source
    input_manager = registry.create_input_manager(args.game)

    print("Controls:")
    print("  - Click to play")
    print("  - R to start over")
    print("  - ESC to quit")
    print()
    print("=" * 60)

    # Game loop
    clock = pygame.time.Clock()
    running = True
    last_state = game.state

    while running:
        dt = clock.tick(FPS) / 1000.0

        # Update input
        input_manager.update(dt)

        # Handle pygame events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    game.retry()
                    print("\n--- RESTARTED ---\n")

        # Get input events and pass to game
        game.handle_input(input_manager.get_events())

        # Update game
        game.update(dt)

        # Render
        game.render(screen)
        pygame.display.flip()

        if game.state is not last_state and game.state.is_terminal:
            print(f"\n{game.state.value.upper()}  Final Score: {game.get_score()}")
            print("Click to play again, R to restart or ESC to quit")
        last_state = game.state

    game.teardown()
    close_all_sinks()
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
