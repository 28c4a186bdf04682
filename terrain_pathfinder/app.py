# app.py — Slim Flask API around the terrain A* planner
# deps: pip install flask numpy pillow

from __future__ import annotations
from typing import Tuple
from flask import Flask, request, jsonify, make_response

from terrain_pathfinder.config import API_HOST, API_PORT
from terrain_pathfinder.astar_core import AStarPlanner
from terrain_pathfinder.codec import TerrainLoadError, decode_terrain, encode_terrain
from terrain_pathfinder.terrain import MalformedTerrainInput

app = Flask(__name__)

# ======= CORS =======
@app.after_request
def _cors(resp):
    resp.headers["Access-Control-Allow-Origin"]  = "*"
    resp.headers["Access-Control-Allow-Headers"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    return resp


class BadRequest(ValueError):
    pass


def _parse_rc(name: str) -> Tuple[int, int]:
    raw = request.form.get(name, "")
    try:
        r, c = [int(x) for x in raw.split(",")]
    except ValueError:
        raise BadRequest(f"{name}=row,col required")
    return r, c


def _plan_from_request():
    """Shared input handling for /plan and /plan/render."""
    upload = request.files.get("terrain")
    if upload is None:
        raise BadRequest("terrain file required")
    start = _parse_rc("start")
    destination = _parse_rc("destination")
    try:
        terrain = decode_terrain(upload.read())
    except (TerrainLoadError, MalformedTerrainInput) as e:
        raise BadRequest(str(e))
    result = AStarPlanner(terrain).plan(start, destination)
    return terrain, result


@app.errorhandler(BadRequest)
def _bad_request(e):
    return jsonify({"error": str(e)}), 400


# ======= endpoints =======
@app.route("/", methods=["GET"])
def root():
    return {"ok": True, "plan": "/plan (POST multipart)", "render": "/plan/render (POST multipart)"}


@app.route("/plan", methods=["POST"])
def plan():
    """
    multipart form:
      terrain:      raster file (PPM/PNG)
      start:        "row,col"
      destination:  "row,col"
    """
    terrain, result = _plan_from_request()
    return jsonify({
        "status":     result.status.value,
        "route":      [[int(r), int(c)] for r, c in result.route],
        "cost":       result.cost,
        "expansions": result.expansions,
        "width":      terrain.width,
        "height":     terrain.height,
    })


@app.route("/plan/render", methods=["POST"])
def plan_render():
    terrain, result = _plan_from_request()
    resp = make_response(encode_terrain(terrain.overlay(result.route), "PNG"))
    resp.headers["Content-Type"] = "image/png"
    resp.headers["X-Plan-Status"] = result.status.value
    return resp


if __name__ == "__main__":
    app.run(host=API_HOST, port=API_PORT, threaded=True)
