"""CORS headers on every response, and the bare 200 answer to OPTIONS."""
from fastapi import Request, Response, status

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def apply_cors_headers(request: Request, call_next):
    if request.method == "OPTIONS":
        response = Response(status_code=status.HTTP_200_OK)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response
