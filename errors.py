"""
errors.py — Exception Taxonomy
===============================
Everything the engine can refuse or reject.

    VisualizerError
      ├── ConfigError          – malformed session configuration
      ├── UnknownAlgorithm     – registry lookup miss
      ├── UnknownSession       – session id not registered with the hub
      ├── NoProblemInstance    – stepping a session that was closed (programmer error)
      └── OperationRefused     – locally recoverable, state left untouched
            ├── InvalidTarget  – search target is not a number
            ├── InvalidNode    – start / end node not in the graph
            ├── HeapFull
            ├── HeapEmpty
            └── HeapBusy       – heap operation requested mid-sift

Expected algorithmic outcomes (not found, cycle, negative cycle) are
NOT errors: they are terminal phases on the algorithm state.
"""


class VisualizerError(Exception):
    """Base class for every error raised by this package."""

    kind: str = "error"


class ConfigError(VisualizerError, ValueError):
    kind = "config_error"


class UnknownAlgorithm(VisualizerError, KeyError):
    kind = "unknown_algorithm"

    def __str__(self) -> str:
        return f"Unknown algorithm: {self.args[0] if self.args else ''}"


class UnknownSession(VisualizerError, KeyError):
    kind = "unknown_session"

    def __str__(self) -> str:
        return f"Unknown session: {self.args[0] if self.args else ''}"


class NoProblemInstance(VisualizerError, RuntimeError):
    kind = "no_problem_instance"


class OperationRefused(VisualizerError):
    kind = "refused"


class InvalidTarget(OperationRefused):
    kind = "invalid_target"


class InvalidNode(OperationRefused):
    kind = "invalid_node"


class HeapFull(OperationRefused):
    kind = "heap_full"


class HeapEmpty(OperationRefused):
    kind = "heap_empty"


class HeapBusy(OperationRefused):
    kind = "heap_busy"
