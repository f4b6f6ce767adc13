"""
main.py — Algorithm Visualizer Flask Host
=========================================
The JSON server a browser front end drives.  It holds no algorithmic
logic of its own: it edits the session's inputs, runs tracers, and moves
the playback cursor.

Routes:
  GET    /api/algorithms              – registered tracers + pseudocode
  GET    /api/state                   – playback state + current step
  GET    /api/graph                   – nodes / edges / selected source
  POST   /api/graph/nodes             – add node            {label}
  DELETE /api/graph/nodes/<id>        – delete node (and its edges)
  POST   /api/graph/edges             – add edge            {source, target, weight}
  PATCH  /api/graph/edges/<id>        – change edge weight  {weight}
  DELETE /api/graph/edges/<id>        – delete edge
  POST   /api/graph/reset             – back to the demo graph
  POST   /api/source                  – select source       {source}
  POST   /api/array                   – set sort input      {values}
  POST   /api/array/random            – random sort input   {size}
  POST   /api/run                     – trace + load steps  {algorithm}
  POST   /api/step/next               – cursor + 1
  POST   /api/step/prev               – cursor - 1
  POST   /api/step/play               – toggle auto-play
  POST   /api/config/speed            – ms per step         {speed}
  POST   /api/reset                   – playback back to not-started

State management:
  The Flask cookie only carries a session id.  The VisualizerSession
  behind it (graph, stepper, recorded run) lives in server memory, one
  per id, each behind its own lock.  At most MAX_SESSIONS are kept; the
  least recently used one is dropped first.  Auto-play runs on a
  ManualClock that every request first advances to the current monotonic
  time, so pending ticks fire in order before the request is handled.
"""

import logging
import secrets
import threading
import time
from collections import OrderedDict
from contextlib import contextmanager
from typing import Callable, Iterator

from flask import Blueprint, Flask, current_app, jsonify, request, session

from config import Config
from graph import Graph, GraphEditError, UnknownNodeError, UnknownEdgeError
from algorithms import list_algorithms
from algorithms.exceptions import TraceError
from engine import ManualClock, VisualizerSession

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")


# ---------------------------------------------------------------------------
# Session Store
# ---------------------------------------------------------------------------
class _Slot:
    __slots__ = ("lock", "clock", "session")

    def __init__(self, now: float, cfg):
        self.lock    = threading.Lock()
        self.clock   = ManualClock(start=now)
        self.session = VisualizerSession(
            scheduler=self.clock,
            speed_ms=cfg["DEFAULT_SPEED_MS"],
            min_speed_ms=cfg["MIN_SPEED_MS"],
            max_speed_ms=cfg["MAX_SPEED_MS"],
        )


class SessionStore:
    """Least-recently-used map of session id to slot, capped at `max_sessions`."""

    def __init__(self, now: Callable[[], float], max_sessions: int):
        self.now = now
        self.max_sessions = max(1, int(max_sessions))
        self._slots: "OrderedDict[str, _Slot]" = OrderedDict()
        self._lock = threading.Lock()

    def slot(self, sid: str) -> _Slot:
        with self._lock:
            if sid in self._slots:
                self._slots.move_to_end(sid)
                return self._slots[sid]

            cfg = current_app.config
            s = _Slot(self.now(), cfg)
            s.session.randomize_array(cfg["ARRAY_DEFAULT_SIZE"], max_value=cfg["ARRAY_MAX_VALUE"])
            self._slots[sid] = s
            logger.info("new visualizer session %s", sid[:8])
            while len(self._slots) > self.max_sessions:
                old_sid, _ = self._slots.popitem(last=False)
                logger.info("evicted visualizer session %s", old_sid[:8])
            return s

    def __contains__(self, sid: str) -> bool:
        return sid in self._slots

    def __len__(self) -> int:
        return len(self._slots)


@contextmanager
def visualizer() -> Iterator[VisualizerSession]:
    """The caller's VisualizerSession, locked, with its clock caught up."""
    if "sid" not in session:
        session["sid"] = secrets.token_hex(16)
    store: SessionStore = current_app.extensions["visualizer_sessions"]
    slot = store.slot(session["sid"])
    with slot.lock:
        slot.clock.advance_to(store.now())
        yield slot.session


def _body() -> dict:
    return request.get_json(silent=True) or {}


def _require(data: dict, key: str):
    if key not in data:
        raise ValueError(f"Missing field: {key}")
    return data[key]


def _graph_payload(vs: VisualizerSession) -> dict:
    payload = vs.graph.to_dict()
    payload["source"] = vs.source
    payload["has_negative_edges"] = vs.graph.has_negative_edges()
    return payload


# ---------------------------------------------------------------------------
# API: Catalogue & State
# ---------------------------------------------------------------------------
@api.route("/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify([
        {
            "key":               a.key,
            "label":             a.label,
            "kind":              a.kind,
            "tags":              a.tags,
            "pseudocode":        a.pseudocode,
            "supports_negative": a.supports_negative,
            "complexity_time":   a.complexity_time,
            "complexity_space":  a.complexity_space,
            "description":       a.description,
        }
        for a in list_algorithms()
    ])


@api.route("/state", methods=["GET"])
def api_state():
    with visualizer() as vs:
        return jsonify(vs.snapshot())


# ---------------------------------------------------------------------------
# API: Graph Editing
# ---------------------------------------------------------------------------
@api.route("/graph", methods=["GET"])
def api_graph():
    with visualizer() as vs:
        return jsonify(_graph_payload(vs))


@api.route("/graph/nodes", methods=["POST"])
def api_add_node():
    label = str(_require(_body(), "label")).strip()
    if not label:
        raise ValueError("Node label cannot be empty")
    with visualizer() as vs:
        node = vs.add_node(label)
        return jsonify(node.to_dict()), 201


@api.route("/graph/nodes/<node_id>", methods=["DELETE"])
def api_delete_node(node_id):
    with visualizer() as vs:
        vs.remove_node(node_id)
        return jsonify(_graph_payload(vs))


@api.route("/graph/edges", methods=["POST"])
def api_add_edge():
    data = _body()
    with visualizer() as vs:
        edge = vs.add_edge(_require(data, "source"), _require(data, "target"), _require(data, "weight"))
        return jsonify(edge.to_dict()), 201


@api.route("/graph/edges/<edge_id>", methods=["PATCH"])
def api_edge_weight(edge_id):
    weight = _require(_body(), "weight")
    with visualizer() as vs:
        edge = vs.set_edge_weight(edge_id, weight)
        return jsonify(edge.to_dict())


@api.route("/graph/edges/<edge_id>", methods=["DELETE"])
def api_delete_edge(edge_id):
    with visualizer() as vs:
        vs.remove_edge(edge_id)
        return jsonify(_graph_payload(vs))


@api.route("/graph/reset", methods=["POST"])
def api_graph_reset():
    with visualizer() as vs:
        vs.load_graph(Graph.sample())
        return jsonify(_graph_payload(vs))


@api.route("/source", methods=["POST"])
def api_source():
    source = _require(_body(), "source")
    with visualizer() as vs:
        vs.select_source(source)
        return jsonify({"source": vs.source})


# ---------------------------------------------------------------------------
# API: Sort Input
# ---------------------------------------------------------------------------
@api.route("/array", methods=["POST"])
def api_array():
    values = _require(_body(), "values")
    if not isinstance(values, list):
        raise ValueError("values must be a list of numbers")
    cfg = current_app.config
    if not cfg["ARRAY_MIN_SIZE"] <= len(values) <= cfg["ARRAY_MAX_SIZE"]:
        raise ValueError(
            f"Array must have between {cfg['ARRAY_MIN_SIZE']} and {cfg['ARRAY_MAX_SIZE']} elements"
        )
    with visualizer() as vs:
        return jsonify({"values": vs.set_array(values)})


@api.route("/array/random", methods=["POST"])
def api_array_random():
    cfg = current_app.config
    size = _body().get("size", cfg["ARRAY_DEFAULT_SIZE"])
    try:
        size = int(size)
    except (TypeError, ValueError):
        size = cfg["ARRAY_DEFAULT_SIZE"]
    size = min(max(size, cfg["ARRAY_MIN_SIZE"]), cfg["ARRAY_MAX_SIZE"])
    with visualizer() as vs:
        return jsonify({"values": vs.randomize_array(size, max_value=cfg["ARRAY_MAX_VALUE"])})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@api.route("/run", methods=["POST"])
def api_run():
    algo_key = _require(_body(), "algorithm")
    with visualizer() as vs:
        vs.run(algo_key)
        payload = vs.recorder.export()
        payload["state"] = vs.snapshot()
        return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
@api.route("/step/next", methods=["POST"])
def api_step_next():
    with visualizer() as vs:
        moved = vs.stepper.step_forward()
        return jsonify({"moved": moved, **vs.snapshot()})


@api.route("/step/prev", methods=["POST"])
def api_step_prev():
    with visualizer() as vs:
        moved = vs.stepper.step_back()
        return jsonify({"moved": moved, **vs.snapshot()})


@api.route("/step/play", methods=["POST"])
def api_step_play():
    with visualizer() as vs:
        vs.stepper.toggle_play()
        return jsonify(vs.snapshot())


@api.route("/config/speed", methods=["POST"])
def api_config_speed():
    speed = _require(_body(), "speed")
    with visualizer() as vs:
        vs.stepper.set_speed(speed)
        return jsonify({"speed_ms": vs.stepper.speed_ms})


@api.route("/reset", methods=["POST"])
def api_reset():
    with visualizer() as vs:
        vs.reset_playback()
        return jsonify(vs.snapshot())


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------
@api.errorhandler(UnknownNodeError)
@api.errorhandler(UnknownEdgeError)
def _not_found(err):
    return jsonify({"error": str(err)}), 404


@api.errorhandler(GraphEditError)
@api.errorhandler(TraceError)
@api.errorhandler(ValueError)
def _bad_request(err):
    logger.info("rejected %s %s: %s", request.method, request.path, err)
    return jsonify({"error": str(err)}), 400


# ---------------------------------------------------------------------------
# App Factory
# ---------------------------------------------------------------------------
def create_app(config_object=Config, now: Callable[[], float] = time.monotonic) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.from_prefixed_env("VISUALIZER")
    app.extensions["visualizer_sessions"] = SessionStore(now, app.config["MAX_SESSIONS"])
    app.register_blueprint(api)
    return app


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    app = create_app()
    _configure_logging(app.config["LOG_LEVEL"])
    app.run(debug=False, threaded=True)


if __name__ == "__main__":
    main()
