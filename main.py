import os
import json
import logging
from urllib.parse import quote

from dotenv import load_dotenv
from flask import Flask, request, jsonify
from flask_cors import CORS
import requests

# ----------------------
# Configuration
# ----------------------
load_dotenv()

PRIVATE_API_URL = os.getenv("PRIVATE_API_URL")
FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "8080"))

# Body the backend expects for every sheet lookup
SHEET_PAYLOAD = {"name": "Form responses 1"}

# Characters encodeURIComponent leaves as-is on top of quote()'s own safe set
_SEGMENT_SAFE = "!*'()"

# Logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("office-metrics-proxy")

# ----------------------
# App Setup
# ----------------------
app = Flask(__name__)
CORS(app, origins=[FRONTEND_ORIGIN])

# ----------------------
# Helpers
# ----------------------
def encode_segment(value: str) -> str:
    """Lowercase a path segment and percent-encode it like encodeURIComponent."""
    if not isinstance(value, str):
        raise TypeError(f"expected str path segment, got {type(value).__name__}")
    return quote(value.lower(), safe=_SEGMENT_SAFE)

def build_target_url(base_url: str, office: str, metric: str) -> str:
    """Build <base_url>/<office>/<metric> with both segments encoded."""
    if not base_url:
        raise RuntimeError("PRIVATE_API_URL is not configured")
    return f"{base_url.rstrip('/')}/{encode_segment(office)}/{encode_segment(metric)}"

def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant: {name}")

def parse_backend_json(resp) -> object:
    """Parse a backend body as strict JSON; NaN and Infinity are rejected."""
    return json.loads(resp.text, parse_constant=_reject_constant)

# ----------------------
# Endpoints
# ----------------------
@app.route("/", methods=["GET"])
def health_check():
    return jsonify({"status": "proxy-running"}), 200

@app.route("/api/syncData", methods=["POST"])
def sync_data():
    try:
        # Parse regardless of Content-Type; bad JSON raises BadRequest
        data = request.get_json(force=True)
        office = data["office"]
        metric = data["metric"]

        target_url = build_target_url(PRIVATE_API_URL, office, metric)
        logger.info("Fetching from backend: %s", target_url)

        resp = requests.post(
            target_url,
            json=SHEET_PAYLOAD,
            headers={"Content-Type": "application/json"},
            timeout=REQUEST_TIMEOUT
        )

        if not 200 <= resp.status_code < 300:
            logger.warning("Backend returned %s for %s", resp.status_code, target_url)
            return jsonify({"success": False, "status": resp.status_code}), 200

        return jsonify({"success": True, "data": parse_backend_json(resp)}), 200
    except Exception:
        logger.exception("Proxy error")
        return jsonify({"success": False, "error": "Server error"}), 500

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT)
