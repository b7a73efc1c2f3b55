"""
project: hexmap-generator
module: generate_api.py
License: MIT

HTTP adapter around the generation engine.

Parses and validates the request body, runs one generation, and returns the
manifest as JSON. Input problems map to 400, anything raised by the engine
(including MapInvariantError) maps to a generic 500. Every response carries
CORS headers so browser clients can call the endpoint directly.
"""
import json
import time
from typing import NamedTuple, Optional

from flask import Blueprint, current_app, jsonify, request

from mapgen.generation import GenerationOptions, MapGenerator, MapInvariantError
from mapgen.logging_utils import get_logger
from mapgen.validation import GENERATE_OPTIONS, GENERATE_REQUEST, validate_or_raise
from mapgen.version import __version__

bp_generate = Blueprint('generate_api', __name__)
log = get_logger("mapgen.service")


class GenerationRequest(NamedTuple):
    seed: Optional[str]
    hexagon_count: int
    options: GenerationOptions


def parse_generation_request(raw: str, default_count: int, max_count: int) -> GenerationRequest:
    """Turn a raw JSON body into a validated GenerationRequest.

    Empty body => all defaults. A missing, null or non-positive hexagonCount falls
    back to `default_count`. Raises ValueError for anything the engine must not see.
    """
    if raw is None or not raw.strip():
        payload = {}
    else:
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise ValueError(f"Invalid JSON request body: {e}") from None
    data = validate_or_raise(payload, GENERATE_REQUEST)

    count = data.get('hexagonCount')
    if count is None or count <= 0:
        count = default_count
    if count > max_count:
        raise ValueError(f"Hexagon count cannot exceed {max_count}")

    raw_options = data.get('options') or {}
    validate_or_raise(raw_options, GENERATE_OPTIONS)
    options = GenerationOptions.from_dict(raw_options)
    options.validate()

    seed = data.get('seed') or None
    return GenerationRequest(seed=seed, hexagon_count=count, options=options)


def _error(status: int, message: str):
    body = {"error": message, "statusCode": status, "timestamp": int(time.time() * 1000)}
    return jsonify(body), status


@bp_generate.after_request
def _cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = current_app.config.get("CORS_ALLOWED_ORIGINS", "*")
    response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type, x-api-key"
    response.headers["Access-Control-Max-Age"] = "86400"
    return response


@bp_generate.route('/api/generate', methods=['POST', 'OPTIONS'])
def generate_map():
    """Generate a hex map.

    Body JSON (all optional):
      { "seed": <str|null>, "hexagonCount": <int>, "options": {
          "corridorRatio": <0..1>, "roomSizeMin": <1..20>, "roomSizeMax": <1..20>,
          "corridorWidth": [<1..3>, ...] } }

    Response: manifest { "metadata": {...}, "hexagons": [...] }
    """
    if request.method == 'OPTIONS':
        return "", 200

    cfg = current_app.config
    try:
        req = parse_generation_request(
            request.get_data(as_text=True),
            cfg.get("DEFAULT_HEXAGON_COUNT", 50),
            cfg.get("MAX_HEXAGON_COUNT", 200),
        )
    except ValueError as e:
        log.warn(event="invalid_request", error=str(e))
        return _error(400, f"Invalid request: {e}")

    log.info(event="generate_request", seed=req.seed, count=req.hexagon_count)
    try:
        manifest = MapGenerator(seed=req.seed, options=req.options).generate(req.hexagon_count)
    except MapInvariantError as e:
        log.error(event="generation_failed", seed=e.seed, error=str(e), kind="invariant")
        return _error(500, "Internal server error: Map generation failed")
    except Exception as e:  # transport boundary: never leak engine errors as 4xx
        log.error(event="generation_failed", seed=req.seed, error=repr(e))
        return _error(500, "Internal server error: Map generation failed")

    stats = manifest.metadata.statistics
    log.info(
        event="generate_metrics",
        seed=manifest.metadata.seed,
        hexagons=stats.actual_count,
        corridors=stats.corridor_count,
        rooms=stats.room_count,
        avg_connections=stats.average_connections,
        max_connections=stats.max_connections,
        longest_path=stats.longest_path,
        generation_ms=manifest.metadata.generation_time_ms,
    )
    return jsonify(manifest.to_dict()), 200


@bp_generate.route('/api/health')
def health():
    return jsonify({"status": "ok", "version": __version__})
