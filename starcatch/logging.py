"""
Star Catch Logging System

Provides consistent per-module logging for the engine and the game, plus
structured record logging for session summaries.

Structured Record Logging:
    Structured records are routed to sinks:
    - FileSink writes JSONL to disk, one file per module
    - NullSink discards records when record logging is disabled

Usage:
    from starcatch.logging import get_logger

    log = get_logger('motion')
    log.debug("Sampled %d cells", count)
    log.info("Camera ready")

    # Structured record logging (session summaries, etc.)
    from starcatch.logging import emit_record
    emit_record('session', {'type': 'summary', 'score': 120})

Configuration:
    Environment variables:
        STARCATCH_LOG_LEVEL=DEBUG            # Global default level
        STARCATCH_LOG_MOTION=TRACE           # Module-specific level
        STARCATCH_LOG_DIR=/tmp/starcatch     # Where FileSink writes

        # Module-specific structured logging
        STARCATCH_LOGGING_SESSION_ENABLED=true

    Or programmatically:
        from starcatch.logging import configure_logging
        configure_logging(level='DEBUG', modules={'input': 'INFO'})
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

ENV_PREFIX = 'STARCATCH_LOG_'
MODULE_ENV_PREFIX = 'STARCATCH_LOGGING_'


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""
    TRACE = 5      # Per-frame detail
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
            module: Module name (e.g., 'session')
            record: Structured data to log (must be JSON-serializable)
        """

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered records."""

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """
    Writes structured log records to JSONL files.

    Each module gets its own file in the log directory. Records are written
    as JSON Lines (one JSON object per line).

    Args:
        log_dir: Directory for log files (default: from get_log_dir())
        session_name: Session identifier for file naming (default: timestamp)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        session_name: Optional[str] = None,
    ):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def _ensure_dir(self) -> Path:
        """Lazily initialize log directory."""
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _path_for(self, module: str) -> Path:
        return self._ensure_dir() / f"{self._session_name}_{module}.jsonl"

    def _get_file(self, module: str) -> TextIO:
        """Get or create file handle for module."""
        if module not in self._files:
            handle = open(self._path_for(module), 'a')
            header = {
                "type": "header",
                "module": module,
                "session_name": self._session_name,
                "start_time": time.time(),
                "start_time_iso": time.strftime("%Y-%m-%dT%H:%M:%S"),
            }
            handle.write(json.dumps(header) + "\n")
            self._files[module] = handle
        return self._files[module]

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write record to module's JSONL file."""
        f = self._get_file(module)
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        f.write(json.dumps(record) + "\n")

    def flush(self) -> None:
        for f in self._files.values():
            f.flush()

    def close(self) -> None:
        """Write footers and close all open files."""
        for module, f in self._files.items():
            footer = {
                "type": "footer",
                "module": module,
                "end_time": time.time(),
                "end_time_iso": time.strftime("%Y-%m-%dT%H:%M:%S"),
            }
            f.write(json.dumps(footer) + "\n")
            f.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Get paths to all open log files."""
        return {module: self._path_for(module) for module in self._files}


class NullSink(LogSink):
    """No-op sink when record logging is disabled."""

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
    """Get the sink registered for a module."""
    return _sinks.get(module)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Emit a structured log record to the appropriate sink.

    Returns:
        True if record was emitted, False if no sink available
    """
    sink = get_sink(module)
    if sink:
        sink.emit(module, record)
        return True
    return False


def close_all_sinks() -> None:
    """Close all registered sinks."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink(module: str, session_name: Optional[str] = None) -> LogSink:
    """
    Create the sink configured for a module.

    Returns a FileSink when STARCATCH_LOGGING_<MODULE>_ENABLED is set,
    otherwise a NullSink.
    """
    config = get_module_config(module)
    if not config.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=config.get('dir'), session_name=session_name)


# =============================================================================
# Global configuration
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,     # Override log directory (None = platform default)
    'modules': {},       # Per-module record settings
}


def get_log_dir() -> str:
    """Get the log directory.

    Priority:
    1. Configured log_dir (STARCATCH_LOG_DIR at import time)
    2. Platform-specific user data directory:
       - macOS: ~/Library/Application Support/StarCatch/logs
       - Windows: %APPDATA%/StarCatch/logs
       - Linux: ~/.local/share/starcatch/logs
    """
    if _config.get('log_dir'):
        return str(Path(_config['log_dir']).expanduser())

    if sys.platform == 'darwin':
        user_data = Path.home() / 'Library' / 'Application Support' / 'StarCatch'
    elif sys.platform == 'win32':
        user_data = Path(os.environ.get('APPDATA', str(Path.home()))) / 'StarCatch'
    else:
        xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
        user_data = Path(xdg_data) / 'starcatch'

    return str(user_data / 'logs')


def get_module_config(module: str) -> Dict[str, Any]:
    """Get record settings for a module, empty dict if none configured."""
    return _config['modules'].get(module.lower(), {})


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
    try:
        return float(value)
    except ValueError:
        pass
    return value


def _level_from_string(level_str: str) -> LogLevel:
    """Convert string to LogLevel (unknown names map to INFO)."""
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
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level for all modules
        modules: Dict of module_name -> level for per-module configuration
    """
    _config['default_level'] = _level_from_string(level)
    if modules:
        for mod, mod_level in modules.items():
            _config['module_levels'][mod.lower()] = _level_from_string(mod_level)


def _load_env_config() -> None:
    """Load configuration from environment variables.

    - STARCATCH_LOG_*: levels (STARCATCH_LOG_MOTION=DEBUG)
    - STARCATCH_LOGGING_<MODULE>_<KEY>: record settings
      (STARCATCH_LOGGING_SESSION_ENABLED=true)
    """
    if 'STARCATCH_LOG_LEVEL' in os.environ:
        _config['default_level'] = _level_from_string(os.environ['STARCATCH_LOG_LEVEL'])

    if 'STARCATCH_LOG_DIR' in os.environ:
        _config['log_dir'] = os.environ['STARCATCH_LOG_DIR']

    reserved = ('STARCATCH_LOG_LEVEL', 'STARCATCH_LOG_DIR')
    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX) and key not in reserved:
            module_name = key[len(ENV_PREFIX):].lower()
            _config['module_levels'][module_name] = _level_from_string(value)

    for key, value in os.environ.items():
        if key.startswith(MODULE_ENV_PREFIX):
            parts = key[len(MODULE_ENV_PREFIX):].lower().split('_', 1)
            if len(parts) == 2:
                module, setting = parts
                _config['modules'].setdefault(module, {})[setting] = _parse_env_value(value)


_load_env_config()


class StarCatchLogger:
    """
    Logger for a specific module.

    Messages are formatted as "[module] LEVEL: message" and printed to
    stdout when the module's effective level allows it.
    """

    def __init__(self, module: str):
        self.module = module
        self._module_key = module.lower().replace('.', '_').replace('/', '_')

    @property
    def level(self) -> LogLevel:
        """Get effective log level for this module."""
        if self._module_key in _config['module_levels']:
            return _config['module_levels'][self._module_key]
        return _config['default_level']

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, level_name: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return

        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"

        print(f"[{self.module}] {level_name}: {msg}")

    def trace(self, msg: str, *args) -> None:
        """Log at TRACE level (per-frame detail)."""
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def exception(self, msg: str, *args) -> None:
        """Log an error followed by the current exception's traceback."""
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

        tb = traceback.format_exc()
        if tb and tb.strip() != 'NoneType: None':
            for line in tb.strip().split('\n'):
                self._log(LogLevel.ERROR, 'TRACE', line)


@lru_cache(maxsize=64)
def get_logger(module: str) -> StarCatchLogger:
    """
    Get a logger for the specified module.

    Loggers are cached, so calling get_logger('foo') multiple times
    returns the same logger instance.
    """
    return StarCatchLogger(module)
