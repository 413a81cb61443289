from __future__ import annotations

from hecto_engine.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "normal",
    keys: tuple[str, ...] = ("g", "g"),
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys, timeout_ms=timeout_ms),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("normal.gg")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g", "g"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id


def test_resolver_reports_pending_for_prefix() -> None:
    binding = make_binding("normal.gg")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g",))

    assert result.status == "pending"
    assert result.next_expected == ("g",)


def test_resolver_waits_when_binding_is_also_a_prefix() -> None:
    short = make_binding("normal.g", keys=("g",), action_id="core.top")
    long = make_binding("normal.gg", action_id="core.top")
    registry = build_registry([short, long])
    resolver = KeymapResolver(registry)

    pending = resolver.resolve("normal", ("g",))
    exact = resolver.resolve("normal", ("g",), exact=True)

    assert pending.status == "pending"
    assert pending.match is None
    assert exact.status == "match"
    assert exact.match is not None
    assert exact.match.binding.id == "normal.g"


def test_resolver_reports_miss_with_consumed_prefix() -> None:
    registry = build_registry([make_binding("normal.gg")])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g", "x"))

    assert result.status == "miss"
    assert result.consumed == 1


def test_resolver_exact_prefix_without_binding_misses() -> None:
    registry = build_registry([make_binding("normal.gg")])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g",), exact=True)

    assert result.status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "panel.gg",
        when=(WhenClause("panel_open"),),
        action_id="core.panel",
    )
    registry = build_registry([gating])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("normal", ("g", "g"), context={})
    assert miss.status == "miss"

    hit = resolver.resolve("normal", ("g", "g"), context={"panel_open": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding("normal.low", keys=("x",), action_id="core.low")
    high = make_binding(
        "normal.high",
        keys=("x",),
        action_id="core.high",
        when=(WhenClause("focused"),),
        priority=5,
    )
    registry = build_registry([low, high])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("x",), context={"focused": True})

    assert result.match is not None
    assert result.match.binding.id == "normal.high"


def test_resolver_pending_returns_timeout_hint() -> None:
    binding = make_binding("normal.gg", timeout_ms=1500)
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g",))

    assert result.status == "pending"
    assert result.timeout_ms == 1500


def test_resolver_keeps_modes_apart() -> None:
    registry = build_registry([make_binding("insert.gg", mode="insert")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", ("g", "g")).status == "miss"
    assert resolver.resolve("insert", ("g", "g")).status == "match"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("normal", ("x",))
    assert miss.status == "miss"

    new_binding = make_binding("normal.x", keys=("x",), action_id="core.x")
    registry.register_action(make_action("core.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("normal", ("x",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id
