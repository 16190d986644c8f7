"""
# aiml2rs: diagnostics.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Warnings and debug output.
"""

from aiml2rs.constants import DEBUG_MODE_INDENT


class DiagnosticLog:
    """
    Object accumulating warnings during conversion, and printing debug messages in debug mode.

    Warnings never interrupt conversion; they are surfaced by the caller after processing.
    """
    _warnings: list[str]
    _debug_mode_enabled: bool

    def __init__(self, debug_mode_enabled: bool = False):
        self._warnings = []
        self._debug_mode_enabled = debug_mode_enabled

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)

    @property
    def debug_mode_enabled(self) -> bool:
        return self._debug_mode_enabled

    def warn(self, message: str):
        self._warnings.append(message)
        self.debug(f'warning: {message}')

    def debug(self, message: str, depth: int = 0):
        if self._debug_mode_enabled:
            print(DEBUG_MODE_INDENT * depth + message)
