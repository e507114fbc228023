"""
project: Zipper
module: generate_api.py

Board generation and solution-check API routes.

Thin transport glue around ``zipper.board``: shape-check the JSON body,
validate the configuration, call the generator, serialize the Board.
"""

from flask import Blueprint, current_app, jsonify, request

from zipper.board import (
    GenerationError,
    ValidationError,
    check_solution,
    generate_board,
    validate_config,
)
from zipper.logging_utils import get_logger
from zipper.validation import CHECK_SOLUTION, GENERATE_REQUEST, validate

bp_generate = Blueprint("generate", __name__)

log = get_logger("zipper.api")

CORS_METHODS = "POST, GET, OPTIONS"
CORS_HEADERS = "Accept, Content-Type, Content-Length, Accept-Encoding, Authorization"


@bp_generate.after_request
def _add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = current_app.config.get("CORS_ALLOWED_ORIGINS", "*")
    response.headers["Access-Control-Allow-Methods"] = CORS_METHODS
    response.headers["Access-Control-Allow-Headers"] = CORS_HEADERS
    return response


def _bad_request(field: str, message: str):
    log.info(event="generate_rejected", field=field, error=message)
    return jsonify({"error": message, "field": field}), 400


def _generate_with_retries(config):
    """Call the generator, retrying transient route failures with fresh randomness.

    A request with an explicit seed is not retried: the same seed would fail
    the same way.
    """
    retries = 0 if config.seed is not None else int(current_app.config.get("GENERATION_RETRIES", 1))
    for attempt in range(retries + 1):
        try:
            return generate_board(config)
        except GenerationError as exc:
            log.warn(event="generate_failed", attempt=attempt + 1, size=config.size, error=str(exc))
            if attempt >= retries:
                raise


@bp_generate.route("/api/generate", methods=["POST"])
@bp_generate.route("/generate-game", methods=["POST"])  # legacy endpoint
def generate():
    """Generate a new board.

    Body JSON: { "size": <int>, "nodes": <int>, "walls": <int>, "seed": <int|str, optional> }
    Response: { "board": [[cell]], "path": [cell], "walls": [wall], "seed": <int> }
    Cell: { "x", "y", "gameNode", "gamePos" }; wall: { "x1", "y1", "x2", "y2", "horizontal" }
    """
    ok, data = validate(request.get_json(silent=True), GENERATE_REQUEST)
    if not ok:
        return _bad_request(data["field"], data["error"])
    try:
        config = validate_config(data)
    except ValidationError as exc:
        return _bad_request(exc.field, exc.message)
    log.info(event="generate_request", size=config.size, nodes=config.checkpoint_count, walls=config.wall_count)
    try:
        board = _generate_with_retries(config)
    except GenerationError as exc:
        return jsonify({"error": str(exc)}), 503
    return jsonify(board.to_dict())


@bp_generate.route("/api/check", methods=["POST"])
def check():
    """Check a player's path against the board reproduced from its seed.

    Body JSON: { "size", "nodes", "walls", "seed", "path": [[x, y], ...] }
    Response: { "valid": <bool>, "nextExpected": <int>, "reason": <str|null> }
    """
    ok, data = validate(request.get_json(silent=True), CHECK_SOLUTION)
    if not ok:
        return _bad_request(data["field"], data["error"])
    try:
        config = validate_config(data)
    except ValidationError as exc:
        return _bad_request(exc.field, exc.message)
    if config.seed is None:
        return _bad_request("seed", "seed must not be empty")
    try:
        board = generate_board(config)
    except GenerationError as exc:
        return jsonify({"error": str(exc)}), 503
    return jsonify(check_solution(board, data["path"]).to_dict())


@bp_generate.route("/api/health")
def health():
    return jsonify({"status": "ok", "version": current_app.config.get("VERSION")})
