"""
main.py — Algorithm Visualizer Flask App
=========================================
JSON adapter over the session engine.  A renderer (browser, notebook,
terminal) creates a session, forwards user intent, and polls snapshots.

Routes:
  GET    /api/algorithms                     – registry cards
  POST   /api/sessions                       – create {algorithm, config}
  GET    /api/sessions/<id>                  – current snapshot
  DELETE /api/sessions/<id>                  – close
  POST   /api/sessions/<id>/play             – auto-play (replays when finished)
  POST   /api/sessions/<id>/pause
  POST   /api/sessions/<id>/step             – one unit of work
  POST   /api/sessions/<id>/reset            – new random instance
  POST   /api/sessions/<id>/restart          – same instance, fresh state
  POST   /api/sessions/<id>/analyze          – run a copy to completion → metrics
  POST   /api/sessions/<id>/config           – {size, delay_ms, speed, …}
  POST   /api/sessions/<id>/selection        – {target, start_node, end_node}
  POST   /api/sessions/<id>/heap/insert      – {value}
  POST   /api/sessions/<id>/heap/extract
  POST   /api/sessions/<id>/heap/build       – {values?}

Settings come from ALGOVIZ_* environment variables
(ALGOVIZ_LOG_LEVEL, ALGOVIZ_HOST, ALGOVIZ_PORT).

State management:
  Every Session lives on the SessionHub's event loop.  Request handlers
  only ever reach a session through `hub.call(...)`, so HTTP requests and
  timer ticks never interleave.  The hub (and its thread) is created on
  the first request; logging is configured only when run as a script.
"""

import atexit
import threading
from typing import Callable, Optional

from flask import Flask, jsonify, request

from algorithms import list_algorithms
from config import SPEED_PRESETS
from engine import Session, SessionHub
from errors import (
    ConfigError,
    OperationRefused,
    UnknownAlgorithm,
    UnknownSession,
    VisualizerError,
)
from logger import get_logger, setup_logging


app = Flask(__name__)
app.config.from_prefixed_env("ALGOVIZ")

logger = get_logger(__name__)

_hub: Optional[SessionHub] = None
_hub_lock = threading.Lock()


def get_hub() -> SessionHub:
    """The process-wide hub, started on first use."""
    global _hub
    with _hub_lock:
        if _hub is None:
            _hub = SessionHub()
            atexit.register(_hub.shutdown)
    return _hub


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
STATUS_BY_ERROR = (
    (ConfigError,      400),
    (UnknownAlgorithm, 404),
    (UnknownSession,   404),
    (OperationRefused, 409),
)


@app.errorhandler(VisualizerError)
def handle_visualizer_error(exc: VisualizerError):
    for cls, status in STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return jsonify({"error": exc.kind, "message": str(exc)}), status
    raise exc


def _body() -> dict:
    return request.get_json(silent=True) or {}


def _respond(session_id: str, action: Optional[Callable] = None, *args, **kwargs):
    """
    Run `action(session, ...)` on the hub and reply with the snapshot taken
    in that same call.  An action returning False is a refusal → 409.
    """
    session = get_hub().get(session_id)

    def run():
        ok = action(session, *args, **kwargs) if action is not None else None
        return ok is not False, session.snapshot_dict(), session.last_refusal

    ok, snap, refusal = get_hub().call(run)
    snap["id"] = session_id
    if not ok and refusal is not None:
        return jsonify({"error": refusal.kind, "message": str(refusal), "session": snap}), 409
    snap["changed"] = ok
    return jsonify(snap)


def _int(data: dict, key: str) -> int:
    try:
        return int(data[key])
    except (KeyError, TypeError, ValueError):
        raise ConfigError(f"'{key}' must be an integer") from None


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({
        "algorithms":    [a.to_dict() for a in list_algorithms()],
        "speed_presets": SPEED_PRESETS,
    })


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------
@app.route("/api/sessions", methods=["POST"])
def api_create_session():
    data = _body()
    algorithm = data.get("algorithm")
    if not algorithm:
        raise ConfigError("'algorithm' is required")
    session_id = get_hub().create(algorithm, data.get("config") or {})
    response = _respond(session_id)
    response.status_code = 201
    return response


@app.route("/api/sessions/<session_id>", methods=["GET"])
def api_get_session(session_id):
    return _respond(session_id)


@app.route("/api/sessions/<session_id>", methods=["DELETE"])
def api_close_session(session_id):
    get_hub().close(session_id)
    return jsonify({"id": session_id, "closed": True})


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
@app.route("/api/sessions/<session_id>/play", methods=["POST"])
def api_play(session_id):
    return _respond(session_id, Session.play)


@app.route("/api/sessions/<session_id>/pause", methods=["POST"])
def api_pause(session_id):
    return _respond(session_id, Session.pause)


@app.route("/api/sessions/<session_id>/step", methods=["POST"])
def api_step(session_id):
    return _respond(session_id, Session.step)


@app.route("/api/sessions/<session_id>/reset", methods=["POST"])
def api_reset(session_id):
    return _respond(session_id, Session.reset)


@app.route("/api/sessions/<session_id>/restart", methods=["POST"])
def api_restart(session_id):
    return _respond(session_id, Session.restart)


@app.route("/api/sessions/<session_id>/analyze", methods=["POST"])
def api_analyze(session_id):
    session = get_hub().get(session_id)
    metrics, refusal = get_hub().call(lambda: (session.analyze(), session.last_refusal))
    if metrics is None:
        return jsonify({"error": refusal.kind, "message": str(refusal)}), 409
    return jsonify({"id": session_id, "metrics": metrics.to_dict()})


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
@app.route("/api/sessions/<session_id>/config", methods=["POST"])
def api_config(session_id):
    changes = dict(_body())
    preset = changes.pop("speed", None)
    if preset is not None:
        if preset not in SPEED_PRESETS:
            raise ConfigError(f"speed must be one of {sorted(SPEED_PRESETS)}")
        changes["delay_ms"] = SPEED_PRESETS[preset]
    if not changes:
        return _respond(session_id)
    return _respond(session_id, lambda session: session.configure(**changes))


@app.route("/api/sessions/<session_id>/selection", methods=["POST"])
def api_selection(session_id):
    data = _body()
    return _respond(
        session_id,
        Session.set_selection,
        target=data.get("target"),
        start_node=data.get("start_node"),
        end_node=data.get("end_node"),
    )


# ---------------------------------------------------------------------------
# Heap operations
# ---------------------------------------------------------------------------
@app.route("/api/sessions/<session_id>/heap/insert", methods=["POST"])
def api_heap_insert(session_id):
    value = _int(_body(), "value")
    return _respond(session_id, Session.heap_insert, value)


@app.route("/api/sessions/<session_id>/heap/extract", methods=["POST"])
def api_heap_extract(session_id):
    return _respond(session_id, Session.heap_extract)


@app.route("/api/sessions/<session_id>/heap/build", methods=["POST"])
def api_heap_build(session_id):
    values = _body().get("values")
    if values is not None:
        try:
            values = [int(v) for v in values]
        except (TypeError, ValueError):
            raise ConfigError("'values' must be a list of integers") from None
    return _respond(session_id, Session.heap_build, values)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    setup_logging(app.config.get("LOG_LEVEL", "INFO"))
    host = app.config.get("HOST", "127.0.0.1")
    port = int(app.config.get("PORT", 5000))
    logger.info("Algorithm Visualizer listening on http://%s:%d", host, port)
    app.run(host=host, port=port, threaded=True)
