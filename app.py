from flask import Flask, request, Response, jsonify, g
import logging
import time
from werkzeug.exceptions import HTTPException

from services import sheet_store
from services.ingest_config import LOG_LEVEL, PORT, SUCCESS_MSG, GET_ONLY_MSG, PARSE_ERR_MSG
from services.telemetry import MalformedPayload, parse_payload, to_rows

app = Flask(__name__)

# Set SHEET_STORE to inject another store (tests, other backends)
app.config.setdefault("SHEET_STORE", None)


# === Logging setup ===
logger = logging.getLogger("sensor_ingest")
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
    logger.addHandler(h)
logger.propagate = False


# === Helpers ===
def _text(body: str) -> Response:
    return Response(body, mimetype="text/plain")


def get_store():
    """Injected store if any, else the configured Google Sheet (built once)."""
    store = app.config.get("SHEET_STORE")
    if store is None:
        store = app.config["SHEET_STORE"] = sheet_store.from_config()
    return store


# === Timing logs ===
@app.before_request
def _start_timer():
    g.start_time = time.time()


@app.after_request
def _log_response(resp):
    dur = (time.time() - g.start_time) if hasattr(g, 'start_time') else -1
    logger.info(f"http {request.method} {request.path} status={resp.status_code} dur_ms={int(dur*1000)}")
    return resp


@app.errorhandler(Exception)
def _handle_error(e):
    if isinstance(e, HTTPException):
        return e
    logger.exception("unhandled_error")
    return jsonify({"error": "internal server error"}), 500


# === Routes ===
@app.route("/", methods=["POST"])
def handle_post():
    try:
        records = parse_payload(request.get_data())
    except MalformedPayload as e:
        logger.warning(f"malformed_payload {e}")
        return _text(PARSE_ERR_MSG + str(e))

    rows = to_rows(records)
    if rows:
        get_store().append_rows(rows)
    return _text(SUCCESS_MSG)


@app.route("/", methods=["GET"])
def handle_get():
    return _text(GET_ONLY_MSG)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT)
