"""Persistence ports: best scores (JSON) and per-game settings (YAML).

Both stores live in the user data directory:
- macOS: ~/Library/Application Support/ExpoHub
- Windows: %APPDATA%/ExpoHub
- Linux/BSD: ~/.local/share/expohub (XDG_DATA_HOME)

EXPOHUB_DATA_DIR overrides the location.

Storage failures never interrupt a game. Reads fall back to defaults, and
writes keep the value in memory, logging a warning either way.
"""
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError

from expohub.logging import get_logger
from models import GameSettings

log = get_logger('storage')

BEST_SCORES_FILE = 'best_scores.json'
SETTINGS_FILE = 'settings.yaml'


def get_user_data_dir() -> Path:
    """Get the user data directory, respecting EXPOHUB_DATA_DIR."""
    env_dir = os.environ.get('EXPOHUB_DATA_DIR')
    if env_dir:
        return Path(env_dir).expanduser()
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'ExpoHub'
    elif sys.platform == 'win32':
        return Path(os.environ.get('APPDATA', str(Path.home()))) / 'ExpoHub'
    else:
        xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
        return Path(xdg_data) / 'expohub'


class BestScoreStore:
    """Best score per game id, persisted as a flat JSON object.

    The file is read once, lazily. After that the in-memory copy is the
    source of truth, and every set_best() rewrites the file.

    Examples:
        >>> store = BestScoreStore(Path('/tmp/scores.json'))
        >>> store.set_best('flappydrone', 12)
        >>> store.get_best('flappydrone')
        12
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = path or get_user_data_dir() / BEST_SCORES_FILE
        self._scores: Optional[Dict[str, int]] = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, int]:
        if self._scores is not None:
            return self._scores

        self._scores = {}
        if not self._path.exists():
            return self._scores

        try:
            with open(self._path, 'r') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("Could not read best scores from %s: %s", self._path, e)
            return self._scores

        if not isinstance(data, dict):
            log.warning("Ignoring malformed best scores file %s", self._path)
            return self._scores

        for game_id, value in data.items():
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                self._scores[game_id] = value
        return self._scores

    def get_best(self, game_id: str) -> int:
        """Stored best for game_id, 0 when none."""
        return self._load().get(game_id, 0)

    def set_best(self, game_id: str, value: int) -> None:
        """Record value as the best for game_id and write the file."""
        scores = self._load()
        scores[game_id] = max(0, int(value))
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w') as f:
                json.dump(scores, f, indent=2, sort_keys=True)
        except OSError as e:
            log.warning("Could not save best score for %s: %s (kept in memory)", game_id, e)


class SettingsStore:
    """Per-game tunables persisted as YAML.

    Stored sections are merged field by field over the defaults, so a file
    written by an older version still loads. A section that fails
    validation falls back to its defaults on its own.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = path or get_user_data_dir() / SETTINGS_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> GameSettings:
        """Read settings, falling back to defaults on any failure."""
        if not self._path.exists():
            return GameSettings()

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            log.warning("Could not read settings from %s: %s", self._path, e)
            return GameSettings()

        if not isinstance(data, dict):
            log.warning("Ignoring malformed settings file %s", self._path)
            return GameSettings()

        return merge_settings(GameSettings(), data)

    def save(self, settings: GameSettings) -> bool:
        """Write settings. Returns False (and logs) on failure."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(settings.model_dump(mode='json'), f, sort_keys=False)
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self._path, e)
            return False
        log.info("Settings saved to %s", self._path)
        return True

    def reset(self) -> GameSettings:
        """Restore and persist the defaults."""
        defaults = GameSettings()
        self.save(defaults)
        return defaults


def merge_settings(base: GameSettings, overrides: Dict[str, Any]) -> GameSettings:
    """Overlay a raw dict onto settings, section by section.

    Unknown sections and keys are ignored. Invalid sections keep the
    values from base.
    """
    sections: Dict[str, BaseModel] = {}
    for name in GameSettings.model_fields:
        current: BaseModel = getattr(base, name)
        raw = overrides.get(name)
        if not isinstance(raw, dict):
            sections[name] = current
            continue
        try:
            sections[name] = type(current).model_validate({**current.model_dump(), **raw})
        except ValidationError as e:
            log.warning("Invalid %s settings, keeping current values: %s", name, e.errors()[0]['msg'])
            sections[name] = current
    return GameSettings(**sections)
