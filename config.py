"""
config.py — Session Configuration & Defaults
=============================================
Per-algorithm defaults (sizes, delays, value ranges) and the
`SessionConfig` a caller hands to `create_session`.

    from config import SessionConfig, resolve

    cfg = resolve("bubble_sort", SessionConfig(size=500))   # clamped to 40

Malformed configuration is clamped (numbers) or rejected with
ConfigError (enumerations) here, before any algorithm state exists.
The state machines downstream assume a well-formed ProblemInstance.
"""

from dataclasses import dataclass, replace, fields
from typing import Any, Dict, Optional, Tuple

from errors import ConfigError


# ---------------------------------------------------------------------------
# Timing (milliseconds between auto-advance ticks)
# ---------------------------------------------------------------------------
MIN_DELAY_MS = 10
MAX_DELAY_MS = 5000

SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,   # teaching mode
    "medium": 400,
    "fast":   150,
    "turbo":  50,
}

HEAP_TYPES       = ("min", "max")
TRAVERSAL_KINDS  = ("inorder", "preorder", "postorder", "bfs")
TREE_TYPES       = ("bst", "random")

# graph node ids are single letters A..Z
MAX_GRAPH_NODES = 26


# ---------------------------------------------------------------------------
# Per-algorithm defaults
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoDefaults:
    size:         int                      # array length / node count / heap build count
    min_size:     int
    max_size:     int
    delay_ms:     int
    value_range:  Tuple[int, int] = (10, 100)
    extra_edges:  int            = 0
    capacity:     int            = 0       # heaps only
    bounded:      bool           = False   # explicit values must lie in 0..value_range[1]


ALGORITHM_DEFAULTS: Dict[str, AlgoDefaults] = {
    "bubble_sort":          AlgoDefaults(size=20, min_size=5, max_size=40, delay_ms=50),
    "insertion_sort":       AlgoDefaults(size=20, min_size=5, max_size=40, delay_ms=150),
    "selection_sort":       AlgoDefaults(size=20, min_size=5, max_size=40, delay_ms=75),
    "quick_sort":           AlgoDefaults(size=20, min_size=5, max_size=40, delay_ms=100),
    "merge_sort":           AlgoDefaults(size=30, min_size=5, max_size=40, delay_ms=200),
    "three_way_merge_sort": AlgoDefaults(size=30, min_size=5, max_size=40, delay_ms=300),
    "heap_sort":            AlgoDefaults(size=12, min_size=5, max_size=20, delay_ms=300),
    "count_sort":           AlgoDefaults(size=15, min_size=5, max_size=25, delay_ms=250, value_range=(1, 15), bounded=True),
    "radix_sort":           AlgoDefaults(size=12, min_size=5, max_size=20, delay_ms=300, value_range=(1, 999), bounded=True),
    "linear_search":        AlgoDefaults(size=15, min_size=5, max_size=40, delay_ms=200, value_range=(1, 99)),
    "binary_search":        AlgoDefaults(size=17, min_size=5, max_size=40, delay_ms=750, value_range=(1, 99)),
    "tree_traversal":       AlgoDefaults(size=9,  min_size=1, max_size=31, delay_ms=500, value_range=(1, 99)),
    "heap":                 AlgoDefaults(size=7,  min_size=1, max_size=15, delay_ms=400, value_range=(1, 99), capacity=15),
    "dijkstra":             AlgoDefaults(size=10, min_size=1, max_size=MAX_GRAPH_NODES, delay_ms=400, extra_edges=4),
    "bellman_ford":         AlgoDefaults(size=8,  min_size=1, max_size=MAX_GRAPH_NODES, delay_ms=400, extra_edges=4),
    "kruskal":              AlgoDefaults(size=10, min_size=1, max_size=MAX_GRAPH_NODES, delay_ms=500, extra_edges=5),
    "topological_sort":     AlgoDefaults(size=10, min_size=1, max_size=MAX_GRAPH_NODES, delay_ms=500, extra_edges=3),
}


# ---------------------------------------------------------------------------
# SessionConfig: what the caller may set
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SessionConfig:
    """
    Attributes:
        size        : Array length, tree / graph node count, or heap build count.
        extra_edges : Edges added on top of the spanning backbone (graphs).
        delay_ms    : Delay between auto-advance ticks.
        heap_type   : "min" | "max".
        capacity    : Maximum heap node count.
        traversal   : "inorder" | "preorder" | "postorder" | "bfs".
        tree_type   : "bst" | "random".
        cyclic      : Topological sort only; inject one cycle into the DAG.
        target      : Raw search target as the user typed it.
        start_node  : Graph source node id.
        end_node    : Graph destination node id (Dijkstra).
        seed        : Seed for reproducible random instances.
        values      : Explicit array instead of a random one.
        graph_text  : Adjacency-list text instead of a random graph.
    """

    size:        Optional[int]             = None
    extra_edges: Optional[int]             = None
    delay_ms:    Optional[int]             = None
    heap_type:   str                       = "min"
    capacity:    Optional[int]             = None
    traversal:   str                       = "inorder"
    tree_type:   str                       = "bst"
    cyclic:      bool                      = False
    target:      Optional[Any]             = None
    start_node:  Optional[str]             = None
    end_node:    Optional[str]             = None
    seed:        Optional[int]             = None
    values:      Optional[Tuple[int, ...]] = None
    graph_text:  Optional[str]             = None

    def with_changes(self, **changes: Any) -> "SessionConfig":
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        if "values" in changes and changes["values"] is not None:
            changes["values"] = tuple(changes["values"])
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SessionConfig":
        return cls().with_changes(**(data or {}))


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------
def defaults_for(key: str) -> AlgoDefaults:
    try:
        return ALGORITHM_DEFAULTS[key]
    except KeyError:
        raise ConfigError(f"No defaults registered for algorithm '{key}'") from None


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{name}' must be an integer, got {value!r}") from None


def _check_values(key: str, defaults: AlgoDefaults, values: Tuple[int, ...]) -> Tuple[int, ...]:
    """Explicit arrays are rejected, not clamped: length and (distribution sorts) magnitude."""
    if len(values) > defaults.max_size:
        raise ConfigError(f"{key} takes at most {defaults.max_size} values, got {len(values)}")
    if defaults.bounded:
        if any(v < 0 for v in values):
            raise ConfigError("This algorithm only sorts non-negative integers.")
        high = defaults.value_range[1]
        if any(v > high for v in values):
            raise ConfigError(f"{key} values must not exceed {high}")
    return values


def resolve(key: str, config: Optional[SessionConfig] = None) -> SessionConfig:
    """Fill unset fields from the algorithm defaults, clamp numbers, validate enums."""
    config   = config or SessionConfig()
    defaults = defaults_for(key)

    if config.heap_type not in HEAP_TYPES:
        raise ConfigError(f"heap_type must be one of {HEAP_TYPES}, got {config.heap_type!r}")
    if config.traversal not in TRAVERSAL_KINDS:
        raise ConfigError(f"traversal must be one of {TRAVERSAL_KINDS}, got {config.traversal!r}")
    if config.tree_type not in TREE_TYPES:
        raise ConfigError(f"tree_type must be one of {TREE_TYPES}, got {config.tree_type!r}")

    size        = defaults.size        if config.size        is None else _as_int("size", config.size)
    extra_edges = defaults.extra_edges if config.extra_edges is None else _as_int("extra_edges", config.extra_edges)
    delay_ms    = defaults.delay_ms    if config.delay_ms    is None else _as_int("delay_ms", config.delay_ms)
    capacity    = defaults.capacity    if config.capacity    is None else _as_int("capacity", config.capacity)

    values = config.values
    if values is not None:
        values = _check_values(key, defaults, tuple(_as_int("values", v) for v in values))

    size = _clamp(size, defaults.min_size, defaults.max_size)
    if defaults.capacity:
        capacity = max(1, capacity)
        size     = min(size, capacity)

    return replace(
        config,
        size=size,
        extra_edges=max(0, extra_edges),
        delay_ms=_clamp(delay_ms, MIN_DELAY_MS, MAX_DELAY_MS),
        capacity=capacity,
        values=values,
    )
