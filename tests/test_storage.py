"""
Storage Tests

Best-score JSON store and YAML settings store, including failure paths.

Run with: pytest tests/test_storage.py -v
"""

import json

import yaml

from models import Difficulty, GameSettings
from expohub.storage import (
    BestScoreStore,
    SettingsStore,
    get_user_data_dir,
    merge_settings,
)


class TestUserDataDir:

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv('EXPOHUB_DATA_DIR', str(tmp_path))
        assert get_user_data_dir() == tmp_path

    def test_default_paths_use_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv('EXPOHUB_DATA_DIR', str(tmp_path))
        assert BestScoreStore().path == tmp_path / 'best_scores.json'
        assert SettingsStore().path == tmp_path / 'settings.yaml'


class TestBestScoreStore:
    """Tests for the JSON best-score file."""

    def test_missing_file_reads_zero(self, score_store):
        assert score_store.get_best('flappydrone') == 0

    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / 'nested' / 'scores.json'
        BestScoreStore(path).set_best('flappydrone', 12)

        assert json.loads(path.read_text()) == {'flappydrone': 12}
        assert BestScoreStore(path).get_best('flappydrone') == 12

    def test_corrupt_file_falls_back_to_zero(self, tmp_path):
        path = tmp_path / 'scores.json'
        path.write_text('{not json')
        assert BestScoreStore(path).get_best('flappydrone') == 0

    def test_malformed_entries_skipped(self, tmp_path):
        path = tmp_path / 'scores.json'
        path.write_text(json.dumps({'flappydrone': 'lots', 'starcatcher': 40, 'x': -3}))
        store = BestScoreStore(path)
        assert store.get_best('flappydrone') == 0
        assert store.get_best('starcatcher') == 40
        assert store.get_best('x') == 0

    def test_boolean_entries_skipped(self, tmp_path):
        path = tmp_path / 'scores.json'
        path.write_text(json.dumps({'flappydrone': True, 'starcatcher': 40}))
        store = BestScoreStore(path)
        assert store.get_best('flappydrone') == 0
        assert store.get_best('starcatcher') == 40

    def test_non_object_file_ignored(self, tmp_path):
        path = tmp_path / 'scores.json'
        path.write_text('[1, 2, 3]')
        assert BestScoreStore(path).get_best('flappydrone') == 0

    def test_unwritable_location_keeps_memory(self, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('a file, not a directory')
        store = BestScoreStore(blocker / 'scores.json')

        store.set_best('flappydrone', 8)

        assert store.get_best('flappydrone') == 8


class TestSettingsStore:
    """Tests for the YAML settings file."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert SettingsStore(tmp_path / 'settings.yaml').load() == GameSettings()

    def test_save_and_load(self, tmp_path):
        store = SettingsStore(tmp_path / 'settings.yaml')
        settings = merge_settings(GameSettings(), {
            'flappy_drone': {'gravity': 0.5},
            'memory_match': {'difficulty': 'insane'},
        })

        assert store.save(settings) is True
        loaded = store.load()

        assert loaded.flappy_drone.gravity == 0.5
        assert loaded.memory_match.difficulty is Difficulty.INSANE

    def test_partial_file_merges_over_defaults(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(yaml.safe_dump({'star_catcher': {'max_time': 90}}))

        loaded = SettingsStore(path).load()

        assert loaded.star_catcher.max_time == 90
        assert loaded.star_catcher.lives == 3
        assert loaded.connect_four.rows == 6

    def test_invalid_section_keeps_defaults(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(yaml.safe_dump({
            'connect_four': {'rows': 99},
            'flappy_drone': {'gravity': 0.4},
        }))

        loaded = SettingsStore(path).load()

        assert loaded.connect_four.rows == 6
        assert loaded.flappy_drone.gravity == 0.4

    def test_unparseable_file_gives_defaults(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text('flappy_drone: [unclosed')
        assert SettingsStore(path).load() == GameSettings()

    def test_undecodable_file_gives_defaults(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_bytes(b'flappy_drone:\n  gravity: \xff\xfe0.5\n')
        assert SettingsStore(path).load() == GameSettings()

    def test_non_mapping_file_gives_defaults(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text('- just\n- a list\n')
        assert SettingsStore(path).load() == GameSettings()

    def test_reset_writes_defaults(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(yaml.safe_dump({'star_catcher': {'max_time': 90}}))
        store = SettingsStore(path)

        assert store.reset() == GameSettings()
        assert store.load() == GameSettings()

    def test_save_failure_returns_false(self, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('')
        assert SettingsStore(blocker / 'settings.yaml').save(GameSettings()) is False


class TestMergeSettings:

    def test_unknown_keys_ignored(self):
        merged = merge_settings(GameSettings(), {
            'pinball': {'tilt': True},
            'connect_four': {'rows': 8, 'colour': 'red'},
        })
        assert merged.connect_four.rows == 8

    def test_base_is_not_modified(self):
        base = GameSettings()
        merge_settings(base, {'connect_four': {'cols': 9}})
        assert base.connect_four.cols == 7
