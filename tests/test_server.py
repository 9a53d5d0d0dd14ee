#!/usr/bin/env python3
"""
Test Web Server

Exercise the HTTP routes with FastAPI's TestClient.
"""

import sys
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Add project root and src to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from strip_renderer.config import RendererConfig
from web.server import app, get_config

TOKEN = "s3cret-token"


@pytest.fixture
def config():
    return RendererConfig()


@pytest.fixture
def client(config):
    app.dependency_overrides[get_config] = lambda: config
    yield TestClient(app)
    app.dependency_overrides.clear()


def png_bytes(size, color=(0, 0, 0)) -> bytes:
    buf = BytesIO()
    Image.new('RGB', size, color).save(buf, format='PNG')
    return buf.getvalue()


def render_text(client, text, font_size, fg, bg):
    r = client.post("/renderText", json={"text": text, "fontSize": font_size, "fgColor": fg, "bgColor": bg})
    assert r.status_code == 200, r.text
    return r.json()


# =============================================================================
# Render routes
# =============================================================================

def test_render_text(client):
    result = render_text(client, "+", 6, "#000100", "#010000")
    assert result["rows"] == 8
    assert result["columns"] == 6
    assert len(result["bitmap"]) == 8 * 6
    assert result["bitmap"][0] == 1 << 16
    assert result["bitmap"][11] == 1 << 8


def test_render_space(client):
    r = client.post("/renderSpace", json={"len": 13, "bgColor": "#010000"})
    assert r.status_code == 200
    result = r.json()
    assert result["rows"] == 8
    assert result["columns"] == 13
    assert len(result["bitmap"]) == 8 * 13
    assert result["bitmap"][0] == 1 << 16
    assert result["bitmap"][11] == 1 << 16


def test_render_image(client):
    r = client.post("/renderImage", content=png_bytes((8, 8), (0, 0, 0)))
    assert r.status_code == 200
    result = r.json()
    assert result["rows"] == 8
    assert result["columns"] == 8
    assert len(result["bitmap"]) == 64
    assert result["bitmap"][0] == 0


def test_join(client):
    first = render_text(client, "+", 8, "#000001", "#010000")
    second = render_text(client, "+", 6, "#000010", "#100000")

    r = client.post("/join", json=[first, second])
    assert r.status_code == 200
    result = r.json()
    assert result["rows"] == 8
    assert result["columns"] == 8 + 6
    assert len(result["bitmap"]) == 8 * (8 + 6)
    assert result["bitmap"][0] == 1 << 16
    assert result["bitmap"][11] == 1 << 0
    assert result["bitmap"][8 * 8 + 0] == 1 << 20
    assert result["bitmap"][8 * 8 + 11] == 1 << 4


def test_preview_returns_png(client):
    space = client.post("/renderSpace", json={"len": 3, "bgColor": "#ff0000"}).json()
    r = client.post("/preview?scale=2", json=space)
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    img = Image.open(BytesIO(r.content))
    assert img.size == (6, 16)
    assert img.convert('RGB').getpixel((0, 0)) == (255, 0, 0)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


# =============================================================================
# Errors
# =============================================================================

@pytest.mark.parametrize("route", ["/renderSpace", "/renderText", "/join"])
def test_garbage_body(client, route):
    r = client.post(route, content=b"GARBAGE", headers={"Content-Type": "application/json"})
    assert r.status_code == 400


def test_space_bad_color(client):
    r = client.post("/renderSpace", json={"len": 12, "bgColor": "BADCOLOR"})
    assert r.status_code == 400
    assert "background" in r.json()["detail"]


def test_space_negative_length(client):
    r = client.post("/renderSpace", json={"len": -1, "bgColor": "#000000"})
    assert r.status_code == 400


@pytest.mark.parametrize("fg, bg, which", [
    ("BADCOLOR", "#010000", "foreground"),
    ("#ff00CC", "BADCOLOR", "background"),
])
def test_text_bad_colors(client, fg, bg, which):
    r = client.post("/renderText", json={"text": "+", "fontSize": 6, "fgColor": fg, "bgColor": bg})
    assert r.status_code == 400
    assert which in r.json()["detail"]


def test_image_not_an_image(client):
    r = client.post("/renderImage", content=b"Licensed under the Apache License")
    assert r.status_code == 400


def test_image_bad_size(client):
    r = client.post("/renderImage", content=png_bytes((8, 9)))
    assert r.status_code == 400


def test_image_too_large(client, config):
    config.max_image_bytes = 10
    r = client.post("/renderImage", content=png_bytes((8, 8)))
    assert r.status_code == 413


def test_join_empty_list(client):
    r = client.post("/join", json=[])
    assert r.status_code == 400


def test_join_inconsistent_strip(client):
    r = client.post("/join", json=[{"rows": 8, "columns": 2, "bitmap": [0] * 3}])
    assert r.status_code == 400


def test_join_row_mismatch(client, config):
    strips = [{"rows": 8, "columns": 1, "bitmap": [1] * 8}, {"rows": 4, "columns": 1, "bitmap": [2] * 4}]

    r = client.post("/join", json=strips)
    assert r.status_code == 400

    config.strict_join = False
    r = client.post("/join", json=strips)
    assert r.status_code == 200
    assert r.json()["bitmap"] == [1] * 8 + [2] * 4


def test_preview_empty_strip(client):
    r = client.post("/preview", json={"rows": 8, "columns": 0, "bitmap": []})
    assert r.status_code == 400


@pytest.mark.parametrize("scale", [0, -3, 65, 200000])
def test_preview_scale_out_of_range(client, scale):
    r = client.post(f"/preview?scale={scale}", json={"rows": 8, "columns": 1, "bitmap": [0] * 8})
    assert r.status_code == 400


def test_preview_default_scale_from_config(client, config):
    config.preview_scale = 3
    r = client.post("/preview", json={"rows": 8, "columns": 2, "bitmap": [0] * 16})
    assert r.status_code == 200
    assert Image.open(BytesIO(r.content)).size == (6, 24)


@pytest.mark.parametrize("pixel", [-1, 16777216])
def test_join_rejects_pixels_outside_24_bits(client, pixel):
    strip = {"rows": 8, "columns": 1, "bitmap": [pixel] + [0] * 7}
    r = client.post("/join", json=[strip])
    assert r.status_code == 400


def test_space_too_long(client, config):
    config.max_columns = 16
    assert client.post("/renderSpace", json={"len": 16, "bgColor": "#000000"}).status_code == 200
    r = client.post("/renderSpace", json={"len": 17, "bgColor": "#000000"})
    assert r.status_code == 413


def test_text_too_long(client, config):
    config.max_text_length = 4
    assert render_text(client, "ABCD", 6, "#ffffff", "#000000")["columns"] == 4 * 6
    r = client.post("/renderText", json={"text": "ABCDE", "fontSize": 6, "fgColor": "#ffffff", "bgColor": "#000000"})
    assert r.status_code == 413


# =============================================================================
# Authentication
# =============================================================================

def test_auth_required_when_token_configured(client, config):
    config.api_token = TOKEN
    body = {"len": 1, "bgColor": "#000000"}

    assert client.post("/renderSpace", json=body).status_code == 401
    assert client.post("/renderSpace", json=body, headers={"Authorization": "Bearer wrong"}).status_code == 401
    assert client.post("/renderSpace", json=body, headers={"Authorization": TOKEN}).status_code == 401

    r = client.post("/renderSpace", json=body, headers={"Authorization": f"Bearer {TOKEN}"})
    assert r.status_code == 200


def test_auth_covers_every_render_route(client, config):
    config.api_token = TOKEN
    assert client.post("/renderText", json={}).status_code == 401
    assert client.post("/renderImage", content=b"").status_code == 401
    assert client.post("/join", json=[]).status_code == 401
    assert client.get("/health").status_code == 200
