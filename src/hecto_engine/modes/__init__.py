"""Editor modes and dispatch logic.

``ModeManager`` lives in ``hecto_engine.modes.mode_manager``; it loads the
default keymaps, which import the action modules, so it is not re-exported.
"""

from .base_mode import (
    MODE_TRANSITIONS,
    EditorMode,
    InvalidTransitionError,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
)
from .keymap_mode import KeymapMode
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandMode

__all__ = [
    "MODE_TRANSITIONS",
    "EditorMode",
    "InvalidTransitionError",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "NormalMode",
    "InsertMode",
    "CommandMode",
]
