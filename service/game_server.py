import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import BoardConfig
from controller import GameController, tile_payload

app = Flask(__name__)
allowed_origins = os.environ.get("BOARD_ALLOWED_ORIGINS", "*")
CORS(app, resources={r"/*": {"origins": allowed_origins}})
_controller: Optional[GameController] = None


def get_controller() -> GameController:
    global _controller
    if _controller is None:
        _controller = GameController(config=BoardConfig.from_env())
    return _controller


def _config_from_payload(payload: Dict[str, Any], current: BoardConfig) -> BoardConfig:
    size = payload.get("size", current.dimension)
    seed = payload.get("seed", current.seed)
    return BoardConfig(
        dimension=int(size),
        spawn_values=current.spawn_values,
        initial_tiles=current.initial_tiles,
        seed=None if seed is None else int(seed),
    )


@app.get("/state")
def state():
    return jsonify(get_controller().state())


@app.post("/new")
def new_game():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Payload must be a JSON object"}), 400
    controller = get_controller()
    try:
        config = _config_from_payload(payload, controller.board.config)
    except (TypeError, ValueError) as exc:
        return jsonify({"error": str(exc)}), 400

    controller.new_game(config)
    return jsonify(controller.state())


@app.post("/move")
def move():
    payload = request.get_json(force=True, silent=False) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Payload must be a JSON object"}), 400
    direction = payload.get("direction")
    if direction is None:
        return jsonify({"error": "Payload must include 'direction' key"}), 400

    controller = get_controller()
    try:
        result, response = controller.play(direction)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    response["moved"] = result.moved
    response["spawned"] = None
    response["board_full"] = False
    if result.spawn is not None:
        response["board_full"] = result.spawn.board_full
        if result.spawn.tile is not None:
            response["spawned"] = tile_payload(result.spawn.tile)
    return jsonify(response)


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    port = int(os.environ.get("PORT", 5050))
    print(f"Board server starting on http://localhost:{port}")
    # Use 0.0.0.0 so a front end served from another process can reach it.
    app.run(host="0.0.0.0", port=port, debug=bool(os.environ.get("FLASK_DEBUG")))
