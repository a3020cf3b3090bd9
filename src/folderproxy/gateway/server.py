"""FastAPI HTTP server for the folder gateway.

Endpoints (all GET, query parameters only):

    /open?name=subDir&token=...            -> 204, reveals base/subDir
    /test?name=subDir&glob=*.pdf&token=... -> 200, SVG status badge
    /style?class=cls&token=...             -> 200, ".cls { display: ... }"

Errors are answered with a short plaintext reason. Every route checks
the token before touching the filesystem, and the path guard runs before
any stat or process launch.
"""

from __future__ import annotations

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from folderproxy import __version__
from folderproxy.config.settings import GatewayConfig
from folderproxy.domain.models import OpenRequest, BadgeRequest, StyleRequest
from folderproxy.gateway.badge import SVG_MEDIA_TYPE, GlobPatternError, folder_badge
from folderproxy.gateway.guard import (
    InvalidNameError,
    InvalidTokenError,
    check_token,
    resolve_name,
)
from folderproxy.launcher.base import FolderLauncher, LaunchError
from folderproxy.launcher.command import launcher_for_platform

logger = logging.getLogger(__name__)

LISTEN_HOST = "localhost"
STYLE_TEMPLATE = ".{class_name} {{ display: initial !important; }}"


def create_app(config: GatewayConfig, launcher: FolderLauncher | None = None) -> FastAPI:
    """Create the gateway application.

    Args:
        config: Validated, immutable gateway configuration.
        launcher: File-manager launcher. Defaults to the command for the
                  host platform; tests inject a fake.
    """
    app = FastAPI(
        title="folderproxy",
        description="Open local folders in the file manager from a web page",
        version=__version__,
    )
    app.state.config = config
    app.state.launcher = launcher if launcher is not None else launcher_for_platform()

    @app.exception_handler(StarletteHTTPException)
    async def plaintext_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    def _param(request: Request, key: str) -> str:
        # First value wins when a parameter is repeated.
        values = request.query_params.getlist(key)
        return values[0] if values else ""

    def _authorize(given: str) -> None:
        cfg: GatewayConfig = app.state.config
        try:
            check_token(cfg.token.get_secret_value(), given)
        except InvalidTokenError as e:
            logger.warning("Rejected request with invalid token")
            raise HTTPException(status_code=400, detail="Invalid Token") from e

    def _resolve(name: str) -> Path:
        cfg: GatewayConfig = app.state.config
        try:
            return resolve_name(cfg.base_path, name, confine_to_base=cfg.confine_to_base)
        except InvalidNameError as e:
            raise HTTPException(status_code=400, detail="Invalid folder/file name") from e

    @app.get("/open")
    def open_folder(request: Request) -> Response:
        req = OpenRequest(name=_param(request, "name"), token=_param(request, "token"))
        if not req.name:
            raise HTTPException(status_code=400, detail="Missing ?name= parameter")
        _authorize(req.token)
        full_path = _resolve(req.name)

        if not full_path.is_dir():
            logger.info("Not found: %s", full_path)
            raise HTTPException(status_code=404, detail="Not Found")

        launcher: FolderLauncher = app.state.launcher
        try:
            launcher.launch(full_path)
        except LaunchError as e:
            logger.error("Failed to open %s: %s", full_path, e)
            raise HTTPException(status_code=500, detail=f"Failed to open: {e}") from e
        return Response(status_code=204)

    @app.get("/test")
    def test_folder(request: Request) -> Response:
        req = BadgeRequest(
            name=_param(request, "name"),
            glob=_param(request, "glob"),
            token=_param(request, "token"),
        )
        if not req.name:
            raise HTTPException(status_code=400, detail="Missing ?name= parameter")
        _authorize(req.token)
        full_path = _resolve(req.name)

        try:
            svg = folder_badge(full_path, req.glob)
        except GlobPatternError as e:
            logger.warning("Bad glob %r: %s", req.glob, e)
            raise HTTPException(status_code=400, detail="Bad Glob") from e
        return Response(content=svg, media_type=SVG_MEDIA_TYPE)

    @app.get("/style")
    def style(request: Request) -> Response:
        req = StyleRequest(class_name=_param(request, "class"), token=_param(request, "token"))
        if not req.class_name:
            raise HTTPException(status_code=400, detail="Missing ?class= parameter")
        _authorize(req.token)
        css = STYLE_TEMPLATE.format(class_name=req.class_name)
        return Response(content=css, media_type="text/css")

    return app


def main(config: GatewayConfig, launcher: FolderLauncher | None = None) -> None:
    """Serve the gateway on localhost until interrupted."""
    app = create_app(config, launcher)
    uvicorn.run(app, host=LISTEN_HOST, port=config.port)
