# This is a simple test server for the Lambda handlers.
# uvicorn birthday_bot.fast_api_server:app --reload --port 9000
import base64
import json
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from birthday_bot.cronjob_handler import lambda_handler as cronjob_lambda_handler
from birthday_bot.slash_command_handler import lambda_handler as slash_command_lambda_handler


def _process_response(lambda_resp: dict[str, Any]) -> Response:
    """Convert an AWS Lambda-style proxy response into a FastAPI Response."""
    status_code = lambda_resp.get("statusCode", 200)
    content_type = lambda_resp.get("headers", {}).get("Content-Type", "text/plain")
    body = lambda_resp.get("body", "")

    # Handle dict content as JSON
    if isinstance(body, dict):
        return JSONResponse(content=body, status_code=status_code)

    return Response(content=body, status_code=status_code, media_type=content_type)


def _build_event(body: bytes, request: Request) -> dict[str, Any]:
    """Convert a FastAPI request to a Lambda-style (payload v2) event."""
    return {
        "body": base64.b64encode(body).decode("ascii"),
        "isBase64Encoded": True,
        "headers": dict(request.headers),
        "queryStringParameters": dict(request.query_params),
        "requestContext": {"http": {"method": request.method, "path": request.url.path}},
    }


app = FastAPI(title="Birthday Bot")


# --- route to call the slash command ---
@app.post("/slack/birthdays")
async def slash_command(request: Request) -> Response:
    body = await request.body()
    return _process_response(slash_command_lambda_handler(_build_event(body, request), None))


# --- route to trigger the scheduled announcement ---
@app.post("/cronjob")
def cronjob() -> Response:
    lambda_response = cronjob_lambda_handler({}, None)
    status_code = lambda_response.get("statusCode", 200)
    return Response(
        content=json.dumps(lambda_response), status_code=status_code, media_type="application/json"
    )


@app.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}
