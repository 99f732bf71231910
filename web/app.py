from __future__ import annotations

from flask import Flask, jsonify, request
from typing import Optional
import logging
import random
import sys
import threading
from pathlib import Path

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gametree import AIPlayer, Config, Game, SearchError, load_config
from gametree.game import parse_side

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None, rng: Optional[random.Random] = None) -> Flask:
    config = config or load_config()
    logging.basicConfig(level=config.log_level)

    app = Flask(__name__)

    game = Game()
    ai = AIPlayer(config)
    rng = rng or random.Random()
    lock = threading.Lock()
    state = {
        "ai_side": parse_side(config.play.ai_side),
        "against_random_cpu": config.play.against_random_cpu,
    }

    def play_ai() -> Optional[str]:
        """Let the AI move on the live board; ``None`` when it cannot."""
        if game.is_game_over():
            return None
        try:
            move = ai.choose_move(game.board)
        except SearchError as exc:
            logger.warning("AI could not move: %s", exc)
            return None
        game.push_move(move)
        return move.uci()

    def respond(ai_move: Optional[str], **extra):
        snap = game.snapshot()
        snap["ai_move"] = ai_move
        snap["ai_side"] = "white" if state["ai_side"] else "black"
        snap.update(extra)
        return jsonify(snap)

    @app.get("/api/state")
    def api_state():
        with lock:
            return respond(None)

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        fen = data.get("fen")
        try:
            ai_side = parse_side(data.get("ai_side") or config.play.ai_side)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        with lock:
            try:
                game.reset(fen)
            except ValueError as exc:
                return jsonify({"error": f"Invalid FEN: {exc}"}), 400
            state["ai_side"] = ai_side
            state["against_random_cpu"] = bool(
                data.get("against_random_cpu", config.play.against_random_cpu)
            )

            ai_move_uci = None
            pre_fen: Optional[str] = None
            # If the AI has the move it plays immediately
            if game.board.turn == ai_side:
                pre_fen = game.get_full_fen()
                ai_move_uci = play_ai()
            if pre_fen is not None:
                return respond(ai_move_uci, pre_fen=pre_fen)
            return respond(ai_move_uci)

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        uci = payload.get("move")
        if not uci:
            return jsonify({"error": "Missing move"}), 400

        with lock:
            if game.board.turn == state["ai_side"]:
                return jsonify({"error": "It is the AI's turn"}), 400
            random_uci: Optional[str] = None
            try:
                # "r" asks for a random move on the human's behalf
                if uci == "r":
                    move = game.random_move(rng)
                    game.push_move(move)
                    random_uci = move.uci()
                    logger.info("Selected random move: %s", random_uci)
                else:
                    game.push_uci(uci)
            except ValueError as exc:
                return jsonify({"error": str(exc)}), 400

            if random_uci is not None:
                return respond(play_ai(), random_move=random_uci)
            return respond(play_ai())

    @app.post("/api/step")
    def api_step():
        with lock:
            if game.is_game_over():
                return respond(None)
            if game.board.turn == state["ai_side"]:
                return respond(play_ai())
            if not state["against_random_cpu"]:
                return jsonify({"error": "Waiting for a human move"}), 400
            move = game.random_move(rng)
            logger.info("Selected random move: %s", move.uci())
            game.push_move(move)
            return respond(None, random_move=move.uci())

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
