"""
ExpoHub Logging System

Console logging with per-module levels, plus structured records routed to
sinks (session results, for example).

Usage:
    from expohub.logging import get_logger

    log = get_logger('scheduler')
    log.debug("Task registered")
    log.info("Session started")

    # Structured record logging (session results, etc.)
    from expohub.logging import emit_record
    emit_record('sessions', {'game': 'flappydrone', 'score': 12})

Configuration:
    Environment variables:
        EXPOHUB_LOG_LEVEL=DEBUG              # Global default level
        EXPOHUB_LOG_SCHEDULER=TRACE          # Module-specific level
        EXPOHUB_LOG_DIR=/tmp/expohub-logs    # Where FileSink writes

        # Module-specific structured logging
        EXPOHUB_LOGGING_SESSIONS_ENABLED=true

    Or programmatically:
        from expohub.logging import configure_logging
        configure_logging(level='DEBUG', modules={'storage': 'WARNING'})
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Optional
from functools import lru_cache


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""
    TRACE = 5      # Per-tick detail
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100      # Disable logging


# =============================================================================
# Sink-Based Structured Logging
# =============================================================================

class LogSink(ABC):
    """
    Abstract base class for log record sinks.

    Sinks receive structured log records and write them to their destination.
    """

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """
        Emit a structured log record.

        Args:
            module: Module name (e.g., 'sessions')
            record: Structured data to log (must be JSON-serializable)
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered records."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        pass

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """
    Writes structured log records to JSONL files.

    Each module gets its own file in the log directory, one JSON object
    per line.

    Args:
        log_dir: Directory for log files (default: from get_log_dir())
        session_name: Identifier for file naming (default: timestamp)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        session_name: Optional[str] = None,
    ):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, Any] = {}  # module -> file handle

    def _ensure_dir(self) -> Path:
        """Lazily initialize log directory."""
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _get_file(self, module: str):
        """Get or create file handle for module."""
        if module not in self._files:
            log_dir = self._ensure_dir()
            path = log_dir / f"{self._session_name}_{module}.jsonl"
            self._files[module] = open(path, 'a')
        return self._files[module]

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write record to module's JSONL file."""
        f = self._get_file(module)
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        f.write(json.dumps(record) + "\n")

    def flush(self) -> None:
        """Flush all open files."""
        for f in self._files.values():
            f.flush()

    def close(self) -> None:
        """Close all open files."""
        for f in self._files.values():
            f.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Get paths to all log files."""
        log_dir = self._ensure_dir()
        return {
            module: log_dir / f"{self._session_name}_{module}.jsonl"
            for module in self._files
        }


class NullSink(LogSink):
    """No-op sink when structured logging is disabled."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


# Sink registry - active sinks by module
_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Register a sink for a specific module."""
    _sinks[module] = sink


def get_sink(module: str) -> Optional[LogSink]:
    """Get the sink registered for a module, creating one from config if needed."""
    if module not in _sinks:
        _sinks[module] = create_sink(module)
    return _sinks[module]


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Emit a structured log record to the module's sink.

    Args:
        module: Module name (e.g., 'sessions')
        record: Structured data to log (must be JSON-serializable)

    Returns:
        True if record went to a real sink, False if logging is disabled
    """
    sink = get_sink(module)
    if sink is None or isinstance(sink, NullSink):
        return False
    sink.emit(module, record)
    sink.flush()
    return True


def close_all_sinks() -> None:
    """Close all registered sinks."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink(module: str) -> LogSink:
    """
    Create the sink configured for a module.

    Returns a FileSink when EXPOHUB_LOGGING_<MODULE>_ENABLED is set,
    otherwise a NullSink.
    """
    config = get_module_config(module)
    if not config.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=config.get('dir'))


# =============================================================================
# Global configuration
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,         # Override log directory (None = platform default)
    'modules': {},           # Per-module structured logging settings
}


def get_log_dir() -> str:
    """Get the log directory, respecting EXPOHUB_LOG_DIR.

    Priority:
    1. Configured log_dir in _config
    2. EXPOHUB_LOG_DIR environment variable
    3. Platform-specific user data directory
    """
    if _config.get('log_dir'):
        return str(Path(_config['log_dir']).expanduser())

    env_dir = os.environ.get('EXPOHUB_LOG_DIR')
    if env_dir:
        return str(Path(env_dir).expanduser())

    if sys.platform == 'darwin':
        user_data = Path.home() / 'Library' / 'Application Support' / 'ExpoHub'
    elif sys.platform == 'win32':
        user_data = Path(os.environ.get('APPDATA', str(Path.home()))) / 'ExpoHub'
    else:
        xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
        user_data = Path(xdg_data) / 'expohub'

    return str(user_data / 'logs')


def get_module_config(module: str) -> Dict[str, Any]:
    """Get structured logging configuration for a module.

    EXPOHUB_LOGGING_SESSIONS_ENABLED=true maps to {'enabled': True}.
    """
    return _config.get('modules', {}).get(module.lower(), {})


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    try:
        return int(value)
    except ValueError:
        pass
    return value


def _format_message(module: str, level: str, msg: str) -> str:
    """Format a log message."""
    return f"[{module}] {level}: {msg}"


def _level_from_string(level_str: str) -> LogLevel:
    """Convert string to LogLevel."""
    mapping = {
        'TRACE': LogLevel.TRACE,
        'DEBUG': LogLevel.DEBUG,
        'INFO': LogLevel.INFO,
        'WARNING': LogLevel.WARNING,
        'WARN': LogLevel.WARNING,
        'ERROR': LogLevel.ERROR,
        'CRITICAL': LogLevel.CRITICAL,
        'OFF': LogLevel.OFF,
    }
    return mapping.get(level_str.upper(), LogLevel.INFO)


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level for all modules
        modules: Dict of module_name -> level for per-module configuration
        log_dir: Directory for structured record files
    """
    _config['default_level'] = _level_from_string(level)

    if modules:
        for mod, mod_level in modules.items():
            _config['module_levels'][mod] = _level_from_string(mod_level)

    if log_dir is not None:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    """Load configuration from environment variables.

    Supports two prefixes:
    - EXPOHUB_LOG_*: Log levels (EXPOHUB_LOG_SCHEDULER=DEBUG)
    - EXPOHUB_LOGGING_*: Structured record settings
      (EXPOHUB_LOGGING_SESSIONS_ENABLED=true)
    """
    if 'EXPOHUB_LOG_LEVEL' in os.environ:
        _config['default_level'] = _level_from_string(os.environ['EXPOHUB_LOG_LEVEL'])

    reserved = ('EXPOHUB_LOG_LEVEL', 'EXPOHUB_LOG_DIR')
    for key, value in os.environ.items():
        if key.startswith('EXPOHUB_LOG_') and key not in reserved:
            module_name = key[len('EXPOHUB_LOG_'):].lower()
            _config['module_levels'][module_name] = _level_from_string(value)

    for key, value in os.environ.items():
        if key.startswith('EXPOHUB_LOGGING_'):
            parts = key[len('EXPOHUB_LOGGING_'):].lower().split('_', 1)
            if len(parts) == 2:
                module, setting = parts
                _config['modules'].setdefault(module, {})[setting] = _parse_env_value(value)


# Load env config on import
_load_env_config()


_LEVEL_LABELS = {
    LogLevel.TRACE: 'TRACE',
    LogLevel.DEBUG: 'DEBUG',
    LogLevel.INFO: 'INFO',
    LogLevel.WARNING: 'WARN',
    LogLevel.ERROR: 'ERROR',
    LogLevel.CRITICAL: 'CRIT',
}


class ExpoLogger:
    """Logger for a specific module.

    Lines go to stderr so they stay apart from what the launcher prints.
    """

    def __init__(self, module: str):
        self.module = module
        self._module_key = module.lower().replace('.', '_').replace('/', '_')

    @property
    def level(self) -> LogLevel:
        """Effective level: the module override, else the global default."""
        return _config['module_levels'].get(self._module_key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def log(self, level: LogLevel, msg: str, *args) -> None:
        """Write msg % args at level, if enabled."""
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(_format_message(self.module, _LEVEL_LABELS.get(level, level.name), msg), file=sys.stderr)

    def trace(self, msg: str, *args) -> None:
        """Per-tick detail."""
        self.log(LogLevel.TRACE, msg, *args)

    def debug(self, msg: str, *args) -> None:
        self.log(LogLevel.DEBUG, msg, *args)

    def info(self, msg: str, *args) -> None:
        self.log(LogLevel.INFO, msg, *args)

    def warning(self, msg: str, *args) -> None:
        self.log(LogLevel.WARNING, msg, *args)

    def error(self, msg: str, *args) -> None:
        self.log(LogLevel.ERROR, msg, *args)

    def critical(self, msg: str, *args) -> None:
        self.log(LogLevel.CRITICAL, msg, *args)

    def exception(self, msg: str, *args) -> None:
        """Log at ERROR, followed by the traceback being handled (if any)."""
        self.log(LogLevel.ERROR, msg, *args)
        if sys.exc_info()[0] is None:
            return
        for line in traceback.format_exc().rstrip().splitlines():
            self.log(LogLevel.ERROR, "  %s", line)


@lru_cache(maxsize=64)
def get_logger(module: str) -> ExpoLogger:
    """
    Get a logger for the specified module.

    Loggers are cached, so calling get_logger('foo') multiple times
    returns the same logger instance.
    """
    return ExpoLogger(module)
