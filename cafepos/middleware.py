"""Request-wide concerns: cross-origin headers, preflight and last-resort error conversion."""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


async def cors_and_errors(request: Request, call_next):
    # Preflight is answered for any path without routing or auth
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    try:
        response = await call_next(request)
    except Exception as e:
        logger.exception("Server error on %s %s", request.method, request.url.path)
        response = JSONResponse({"error": str(e)}, status_code=500)
    response.headers.update(CORS_HEADERS)
    return response
