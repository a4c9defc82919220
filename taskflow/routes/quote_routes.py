# taskflow/routes/quote_routes.py
from flask import Blueprint, current_app, jsonify

from ..services.quote_service import fetch_quote

quote_bp = Blueprint("quote", __name__)


@quote_bp.route("", methods=["GET"])
def get_quote():
    # Always 200: an unreachable provider yields a fallback quote.
    quote = fetch_quote(
        current_app.config["QUOTE_API_URL"],
        timeout=current_app.config.get("QUOTE_TIMEOUT_SECONDS", 5),
    )
    return jsonify(quote), 200
