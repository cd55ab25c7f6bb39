import typing as t
import logging

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.applications import Starlette
from starlette.routing import Route

from narinfo.errors import NarInfoError
from narinfo.record import ParserOptions, parse_narinfo


logger = logging.getLogger("narinfo.app")


async def validate(req: Request) -> Response:
    try:
        document = (await req.body()).decode("utf-8")
    except UnicodeDecodeError as e:
        logger.info(f"Rejecting request body from {req.client.host if req.client else '?'}: {e}")
        return JSONResponse(
            {"kind": "InvalidEncoding", "message": "Body is not valid UTF-8."},
            status_code=400,
        )

    try:
        info = parse_narinfo(document, req.app.state.options)
    except NarInfoError as e:
        logger.info(f"Rejected narinfo: {e.kind}: {e}")
        return JSONResponse(e.as_dict(), status_code=422)

    logger.debug(f"Accepted narinfo for {info.storepath}")
    return JSONResponse(info.as_dict())


def create_app(options: t.Optional[ParserOptions] = None) -> Starlette:
    app = Starlette(routes=[
        Route("/narinfo", validate, methods=["POST"]),
    ])
    app.state.options = options if options is not None else ParserOptions.from_env()
    return app
