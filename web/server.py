#!/usr/bin/env python3
"""
Strip Renderer - Web Server

A small FastAPI service that renders spacers, text and images into
display strips and joins strips together.

Run with: python web/server.py
Or: uvicorn web.server:app --reload
"""

import logging
import secrets
import sys
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field
import uvicorn

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from strip_renderer import __version__
from strip_renderer.color import parse_color
from strip_renderer.config import RendererConfig, load_config
from strip_renderer.errors import InvalidColorFormat, RenderError
from strip_renderer.logging_setup import setup_logging
from strip_renderer.preview import strip_to_image, to_png_bytes
from strip_renderer.render import join, render_image, render_space, render_text
from strip_renderer.strip import Strip

logger = logging.getLogger("strip_renderer.server")

_config: Optional[RendererConfig] = None


def get_config() -> RendererConfig:
    """Settings for the running server, loaded on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


# =============================================================================
# Request Models
# =============================================================================

class SpaceRequest(BaseModel):
    len: int = 0
    bg_color: str = Field("", alias="bgColor")


class TextRequest(BaseModel):
    text: str = ""
    font_size: int = Field(0, alias="fontSize")
    fg_color: str = Field("", alias="fgColor")
    bg_color: str = Field("", alias="bgColor")


class MatrixModel(BaseModel):
    rows: int
    columns: int
    bitmap: Optional[List[int]] = None

    def to_strip(self) -> Strip:
        return Strip.from_dict({"rows": self.rows, "columns": self.columns, "bitmap": self.bitmap})


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="Strip Renderer",
    description="Renders text, images and spacers for 8-row LED displays",
    version=__version__,
)


@app.exception_handler(RequestValidationError)
async def invalid_json_handler(request: Request, exc: RequestValidationError):
    """Return 400 for malformed request bodies."""
    logger.warning(f"{request.url.path}: invalid JSON")
    return JSONResponse(status_code=400, content={"detail": f"Invalid JSON: {exc.errors()}"})


def check_auth(
    authorization: Optional[str] = Header(None),
    config: RendererConfig = Depends(get_config),
) -> None:
    """Require 'Authorization: Bearer <token>' when a token is configured."""
    if not config.auth_enabled:
        return
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(401, "Access denied: missing bearer token")
    if not secrets.compare_digest(token.strip().encode(), config.api_token.encode()):
        raise HTTPException(401, "Access denied: invalid token")


def _color(text: str, what: str) -> int:
    try:
        return parse_color(text)
    except InvalidColorFormat:
        logger.warning(f"Rejected {what} color {text!r}")
        raise HTTPException(400, f"unable to parse {what} color") from None


# =============================================================================
# Render Endpoints
# =============================================================================

@app.post("/renderSpace", dependencies=[Depends(check_auth)])
async def render_space_endpoint(space: SpaceRequest, config: RendererConfig = Depends(get_config)):
    """Render a solid spacer."""
    if space.len > config.max_columns:
        raise HTTPException(413, f"Spacer too long, limit is {config.max_columns} columns")
    bg_color = _color(space.bg_color, "background")
    try:
        strip = render_space(space.len, bg_color)
    except RenderError as e:
        logger.warning(f"renderSpace failed: {e}")
        raise HTTPException(400, str(e))

    logger.info(f"Rendered space: {strip.columns} columns")
    return strip.to_dict()


@app.post("/renderText", dependencies=[Depends(check_auth)])
async def render_text_endpoint(msg: TextRequest, config: RendererConfig = Depends(get_config)):
    """Render text with the small or large font."""
    if len(msg.text) > config.max_text_length:
        raise HTTPException(413, f"Text too long, limit is {config.max_text_length} characters")
    fg_color = _color(msg.fg_color, "foreground")
    bg_color = _color(msg.bg_color, "background")
    try:
        strip = render_text(msg.text, msg.font_size, fg_color, bg_color)
    except RenderError as e:
        logger.warning(f"renderText failed: {e}")
        raise HTTPException(400, str(e))

    logger.info(f"Rendered text: {len(msg.text)} chars, {strip.columns} columns")
    return strip.to_dict()


@app.post("/renderImage", dependencies=[Depends(check_auth)])
async def render_image_endpoint(request: Request, config: RendererConfig = Depends(get_config)):
    """Render an 8 pixel high image sent as the raw request body."""
    data = await request.body()
    if len(data) > config.max_image_bytes:
        raise HTTPException(413, f"Image too large, limit is {config.max_image_bytes} bytes")

    try:
        strip = render_image(data)
    except RenderError as e:
        logger.warning(f"renderImage failed: {e}")
        raise HTTPException(400, str(e))

    logger.info(f"Rendered image: {strip.columns} columns")
    return strip.to_dict()


@app.post("/join", dependencies=[Depends(check_auth)])
async def join_endpoint(matrices: List[MatrixModel], config: RendererConfig = Depends(get_config)):
    """Join strips left to right."""
    try:
        strip = join([m.to_strip() for m in matrices], strict=config.strict_join)
    except RenderError as e:
        logger.warning(f"join failed: {e}")
        raise HTTPException(400, str(e))

    logger.info(f"Joined {len(matrices)} strips: {strip.columns} columns")
    return strip.to_dict()


@app.post("/preview", dependencies=[Depends(check_auth)])
async def preview_endpoint(
    matrix: MatrixModel,
    scale: Optional[int] = Query(None),
    config: RendererConfig = Depends(get_config),
):
    """Draw a strip as a PNG image."""
    try:
        img = strip_to_image(matrix.to_strip(), config.preview_scale if scale is None else scale)
    except RenderError as e:
        raise HTTPException(400, str(e))

    return StreamingResponse(BytesIO(to_png_bytes(img)), media_type="image/png")


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


# =============================================================================
# Entry Point
# =============================================================================

def main():
    """Run the web server."""
    import argparse

    parser = argparse.ArgumentParser(description="Strip Renderer Web Server")
    parser.add_argument("--config", type=Path, default=None, help="Path to renderer.json")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on changes")
    args = parser.parse_args()

    global _config
    _config = load_config(args.config)
    setup_logging(_config.log_level)

    host = args.host or _config.server_host
    port = args.port or _config.server_port

    print("\n" + "=" * 50)
    print("   Strip Renderer - Web Service")
    print("=" * 50)
    print(f"\n   URL: http://localhost:{port}")
    print(f"   Auth: {'bearer token' if _config.auth_enabled else 'disabled'}")
    print("\n   Press Ctrl+C to stop\n")

    uvicorn.run(
        "web.server:app" if args.reload else app,
        host=host,
        port=port,
        reload=args.reload,
        log_level=_config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
