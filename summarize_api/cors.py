# GPL-3.0-only
# summarize_api/cors.py

from starlette.responses import Response


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",  # any extension origin; tighten if needed
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}


def apply_cors_headers(response: Response) -> Response:
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response
