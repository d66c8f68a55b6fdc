"""
Game Registry Tests

Discovery of game_mode.py classes and game creation.

Run with: pytest tests/test_registry.py -v
"""

import pytest

from expohub.games.base_game import BaseGame
from expohub.games.input import InputManager
from games.registry import GameRegistry, get_registry

GAMES = ['connectfour', 'flappydrone', 'memorymatch', 'starcatcher']


@pytest.fixture(scope='module')
def registry():
    return GameRegistry()


class TestDiscovery:

    def test_finds_every_game(self, registry):
        assert registry.list_games() == GAMES

    def test_metadata_from_class(self, registry):
        info = registry.get_game_info('flappydrone')
        assert info.name == "Flappy Drone"
        assert info.game_id == 'flappydrone'
        assert info.module_path == 'games.FlappyDrone'
        assert info.has_config

    def test_lookup_is_case_insensitive(self, registry):
        assert registry.get_game_info('FlappyDrone') is registry.get_game_info('flappydrone')

    def test_tracks_best_flag(self, registry):
        assert registry.get_game_info('starcatcher').tracks_best
        assert not registry.get_game_info('connectfour').tracks_best
        assert not registry.get_game_info('memorymatch').tracks_best

    def test_arguments_include_seed(self, registry):
        names = [arg['name'] for arg in registry.get_game_arguments('starcatcher')]
        assert '--max-time' in names
        assert '--seed' in names

    def test_unknown_game(self, registry):
        assert registry.get_game_info('pinball') is None
        assert registry.get_game_arguments('pinball') == []
        assert registry.get_game_class('pinball') is None

    def test_empty_directory(self, tmp_path):
        assert GameRegistry(tmp_path).list_games() == []

    def test_singleton(self):
        assert get_registry() is get_registry()


class TestCreation:

    @pytest.mark.parametrize('slug', GAMES)
    def test_create_each_game(self, registry, slug):
        game = registry.create_game(slug, 640, 480, seed=3)
        assert isinstance(game, BaseGame)
        assert game.size == (640, 480)

    def test_game_arguments_passed_through(self, registry):
        game = registry.create_game('connectfour', 640, 480, rows=5, cols=5)
        assert (game.resolver.rows, game.resolver.cols) == (5, 5)

    def test_unknown_slug_raises(self, registry):
        with pytest.raises(ValueError, match='Unknown game'):
            registry.create_game('pinball', 640, 480)

    def test_input_manager(self, registry):
        manager = registry.create_input_manager('flappydrone')
        assert isinstance(manager, InputManager)
        assert manager.has_source()
