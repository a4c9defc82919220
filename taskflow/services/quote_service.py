# taskflow/services/quote_service.py
import logging

import requests

logger = logging.getLogger(__name__)

# Served when the provider answers with something we can't use
EMPTY_PAYLOAD_QUOTE = {
    "text": "The secret of getting ahead is getting started. Every small step counts! 🌟",
    "author": "Mark Twain",
}

# Served when the provider can't be reached at all
UNREACHABLE_QUOTE = {
    "text": "You are capable of amazing things! Keep pushing forward! 💪",
    "author": "TaskFlow",
}


def fetch_quote(url: str, timeout: float = 5) -> dict:
    """
    Fetch one random quote as {"text", "author"}.

    Never raises: any upstream failure is logged and replaced with a fixed
    fallback quote.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning(f"Quote provider unavailable: {exc}")
        return dict(UNREACHABLE_QUOTE)

    # ZenQuotes shape: [{"q": "...", "a": "..."}]
    if isinstance(data, list) and data and isinstance(data[0], dict):
        text = data[0].get("q")
        author = data[0].get("a")
        if text and author:
            return {"text": text, "author": author}

    logger.warning("Quote provider returned an unexpected payload")
    return dict(EMPTY_PAYLOAD_QUOTE)
