"""Built-in keymaps that seed each mode with sensible defaults."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Sequence

from hecto_engine.actions import command as command_actions
from hecto_engine.actions import core as core_actions
from hecto_engine.actions import editing as editing_actions
from hecto_engine.actions import motions

from .models import ActionRef, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ActionRef(
        "core.append_after_cursor",
        core_actions.append_after_cursor,
        "Insert after the cursor",
    ),
    ActionRef(
        "core.append_at_line_end",
        core_actions.append_at_line_end,
        "Insert at the end of the line",
    ),
    ActionRef("core.exit_insert", core_actions.exit_insert_mode, "Leave insert mode"),
    ActionRef(
        "core.enter_command", core_actions.enter_command_mode, "Enter command-line mode"
    ),
    ActionRef("core.quit", core_actions.request_quit, "Quit the editor"),
    ActionRef("motion.left", motions.move_left, "Move left"),
    ActionRef("motion.right", motions.move_right, "Move right"),
    ActionRef("motion.up", motions.move_up, "Move up"),
    ActionRef("motion.down", motions.move_down, "Move down"),
    ActionRef("motion.page_up", motions.page_up, "Scroll one page up"),
    ActionRef("motion.page_down", motions.page_down, "Scroll one page down"),
    ActionRef("motion.document_start", motions.document_start, "Go to first line"),
    ActionRef("motion.document_end", motions.document_end, "Go to last line"),
    ActionRef("motion.line_start", motions.line_start, "Go to start of line"),
    ActionRef("motion.line_end", motions.line_end, "Go to end of line"),
    ActionRef(
        "motion.first_non_blank", motions.first_non_blank, "Go to first non-blank"
    ),
    ActionRef("motion.word_forward", motions.word_forward, "Next word"),
    ActionRef("motion.word_backward", motions.word_backward, "Previous word"),
    ActionRef("edit.newline", editing_actions.insert_newline, "Split the line"),
    ActionRef("edit.tab", editing_actions.insert_tab, "Insert indentation"),
    ActionRef(
        "edit.delete_backward", editing_actions.delete_backward, "Delete backward"
    ),
    ActionRef("edit.delete_forward", editing_actions.delete_forward, "Delete forward"),
    ActionRef(
        "command.submit_line",
        command_actions.submit_command_line,
        "Evaluate the active command line",
    ),
    ActionRef(
        "command.cancel_line",
        command_actions.cancel_command_line,
        "Discard the command line",
    ),
    ActionRef("command.save", command_actions.save_document, "Write the document"),
)

# (binding id, keys, action id); the mode is the id's prefix and keys
# separated by spaces form a sequence.
_BINDING_TABLE: tuple[tuple[str, str, str], ...] = (
    ("normal.enter_insert", "i", "core.enter_insert"),
    ("normal.append", "a", "core.append_after_cursor"),
    ("normal.append_line_end", "A", "core.append_at_line_end"),
    ("normal.enter_command", ":", "core.enter_command"),
    ("normal.quit", "ctrl+q", "core.quit"),
    ("normal.save", "alt+w", "command.save"),
    ("normal.left", "h", "motion.left"),
    ("normal.down", "j", "motion.down"),
    ("normal.up", "k", "motion.up"),
    ("normal.right", "l", "motion.right"),
    ("normal.arrow_left", "LEFT", "motion.left"),
    ("normal.arrow_down", "DOWN", "motion.down"),
    ("normal.arrow_up", "UP", "motion.up"),
    ("normal.arrow_right", "RIGHT", "motion.right"),
    ("normal.line_start", "0", "motion.line_start"),
    ("normal.line_end", "s", "motion.line_end"),
    ("normal.first_non_blank", "S", "motion.first_non_blank"),
    ("normal.word_forward", "w", "motion.word_forward"),
    ("normal.word_backward", "b", "motion.word_backward"),
    ("normal.page_down", "J", "motion.page_down"),
    ("normal.page_up", "K", "motion.page_up"),
    ("normal.document_start", "g", "motion.document_start"),
    ("normal.document_start_gg", "g g", "motion.document_start"),
    ("normal.document_end", "G", "motion.document_end"),
    ("insert.exit_escape", "ESC", "core.exit_insert"),
    ("insert.newline", "ENTER", "edit.newline"),
    ("insert.tab", "TAB", "edit.tab"),
    ("insert.delete_backward", "BACKSPACE", "edit.delete_backward"),
    ("insert.delete_forward", "DELETE", "edit.delete_forward"),
    ("insert.arrow_left", "LEFT", "motion.left"),
    ("insert.arrow_down", "DOWN", "motion.down"),
    ("insert.arrow_up", "UP", "motion.up"),
    ("insert.arrow_right", "RIGHT", "motion.right"),
    ("command.cancel_escape", "ESC", "command.cancel_line"),
    ("command.submit_enter", "ENTER", "command.submit_line"),
)

_DESCRIPTIONS = {action.id: action.description for action in DEFAULT_ACTIONS}

# Command-line keys only fire while a command line is open.
_MODE_WHEN: dict[str, tuple[WhenClause, ...]] = {
    "command": (WhenClause("command_active"),),
}

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(
        id=binding_id,
        mode=binding_id.split(".", 1)[0],
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        description=_DESCRIPTIONS[action_id],
        when=_MODE_WHEN.get(binding_id.split(".", 1)[0], ()),
    )
    for binding_id, keys, action_id in _BINDING_TABLE
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    default_sequence_timeout_ms: int | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not registry.has_action(binding.action_id):
            continue
        registry.register_binding(
            _binding_with_timeout(binding, default_sequence_timeout_ms),
            replace=replace,
        )

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


def _binding_with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None:
        return binding
    return replace(binding, sequence=binding.sequence.with_timeout(timeout_ms))


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
