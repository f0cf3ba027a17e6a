"""
IO Adapter Implementation

Console, environment and logging behind one swappable adapter.
Provides both Mock (for testing) and Real (for production) adapters.
"""

from typing import Dict, List, Optional
from abc import ABC, abstractmethod
import json
import os
import sys


LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}

DEFAULT_LOG_LEVEL = "warning"
LOG_LEVEL_ENV = "MULTIARITY_LOG_LEVEL"


# =============================================================================
# ADAPTER INTERFACE
# =============================================================================

class IOAdapter(ABC):
    """Abstract base for IO adapters"""

    # Console
    @abstractmethod
    def stdout(self, text: str, newline: bool = True) -> None:
        pass

    @abstractmethod
    def stderr(self, text: str) -> None:
        pass

    # Environment
    @abstractmethod
    def env_get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        pass

    # Logging
    @abstractmethod
    def log(self, level: str, message: str, data: Optional[Dict] = None) -> None:
        pass


# =============================================================================
# MOCK ADAPTER (for testing)
# =============================================================================

class MockAdapter(IOAdapter):
    """
    In-memory mock adapter for testing.
    Output and log entries are captured instead of written.
    """

    def __init__(self):
        self.env: Dict[str, str] = {}

        # Capture state (for verification)
        self.stdout_buffer: str = ""
        self.stderr_buffer: str = ""
        self.log_entries: List[Dict] = []

    def setup(self, **kwargs):
        """Configure mock state"""
        if "mock_env" in kwargs:
            self.env = dict(kwargs["mock_env"])
        return self

    def reset_captures(self):
        """Clear captured output"""
        self.stdout_buffer = ""
        self.stderr_buffer = ""
        self.log_entries = []

    # --- Console ---

    def stdout(self, text: str, newline: bool = True) -> None:
        self.stdout_buffer += text
        if newline:
            self.stdout_buffer += "\n"

    def stderr(self, text: str) -> None:
        self.stderr_buffer += text + "\n"

    # --- Environment ---

    def env_get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.env.get(name, default)

    # --- Logging ---

    def log(self, level: str, message: str, data: Optional[Dict] = None) -> None:
        entry = {"level": level, "message": message}
        if data:
            entry["data"] = data
        self.log_entries.append(entry)


# =============================================================================
# REAL ADAPTER (for production)
# =============================================================================

class RealAdapter(IOAdapter):
    """
    Real IO adapter writing to the process streams.

    Log entries below `level` are dropped. When no level is given it is
    read from MULTIARITY_LOG_LEVEL; an unknown value there falls back to
    the default with a warning instead of failing.
    """

    def __init__(self, level: Optional[str] = None):
        if level is None:
            self.level = self._level_from_env()
            return
        level = level.lower()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self.level = level

    def _level_from_env(self) -> str:
        raw = self.env_get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
        level = raw.strip().lower()
        if level in LEVELS:
            return level
        self.stderr(json.dumps({
            "level": "warning",
            "message": "unknown log level, using default",
            "data": {"env": LOG_LEVEL_ENV, "value": raw, "default": DEFAULT_LOG_LEVEL},
        }))
        return DEFAULT_LOG_LEVEL

    # --- Console ---

    def stdout(self, text: str, newline: bool = True) -> None:
        sys.stdout.write(text)
        if newline:
            sys.stdout.write("\n")
        sys.stdout.flush()

    def stderr(self, text: str) -> None:
        sys.stderr.write(text + "\n")
        sys.stderr.flush()

    # --- Environment ---

    def env_get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return os.environ.get(name, default)

    # --- Logging ---

    def log(self, level: str, message: str, data: Optional[Dict] = None) -> None:
        if LEVELS.get(level, LEVELS["error"]) < LEVELS[self.level]:
            return
        entry = {"level": level, "message": message}
        if data:
            entry["data"] = data
        self.stderr(json.dumps(entry, default=str))


# =============================================================================
# GLOBAL ADAPTER (can be swapped)
# =============================================================================

_current_adapter: IOAdapter = RealAdapter()


def set_adapter(adapter: IOAdapter) -> None:
    """Set the global IO adapter"""
    global _current_adapter
    _current_adapter = adapter


def get_adapter() -> IOAdapter:
    """Get the current IO adapter"""
    return _current_adapter


def use_mock(**setup) -> MockAdapter:
    """Switch to mock adapter with optional setup"""
    mock = MockAdapter()
    mock.setup(**setup)
    set_adapter(mock)
    return mock


def use_real(level: Optional[str] = None) -> RealAdapter:
    """Switch to real adapter"""
    real = RealAdapter(level)
    set_adapter(real)
    return real
