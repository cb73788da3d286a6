from datetime import datetime, timezone

from flask import Blueprint, jsonify

from swadaya.extensions import limiter

main_bp = Blueprint("main", __name__, url_prefix="/api")


@main_bp.route("/health")
@limiter.exempt
def health():
    return jsonify(status="ok", timestamp=datetime.now(timezone.utc).isoformat())
