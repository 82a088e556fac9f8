import asyncio
import hashlib
from urllib.parse import parse_qs

import httpx
import pytest

from cookbook_api.core.exceptions import ImageUploadError
from cookbook_api.integrations.cloudinary import CloudinaryClient, sign_params


def make_client(handler, **overrides):
    options = {
        "cloud_name": "demo",
        "api_key": "1234",
        "api_secret": "shhh",
        "folder": "avatars",
        "base_url": "https://api.cloudinary.test/v1_1",
        "transport": httpx.MockTransport(handler),
    }
    options.update(overrides)
    return CloudinaryClient(**options)


def form_of(request):
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


def test_sign_params_sorts_and_appends_secret():
    expected = hashlib.sha1(b"folder=avatars&timestamp=1700000000shhh").hexdigest()

    assert sign_params({"timestamp": 1700000000, "folder": "avatars"}, "shhh") == expected


def test_sign_params_skips_empty_values():
    assert sign_params({"timestamp": 1, "folder": ""}, "s") == sign_params({"timestamp": 1}, "s")


def test_upload_posts_signed_form():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={"secure_url": "https://res.cloudinary.test/a.png", "created_at": "2024-01-13T10:30:00Z"},
        )

    client = make_client(handler)
    result = asyncio.run(client.upload("data:image/png;base64,AAAA"))

    assert result["secure_url"] == "https://res.cloudinary.test/a.png"
    request = seen[0]
    assert str(request.url) == "https://api.cloudinary.test/v1_1/demo/image/upload"
    form = form_of(request)
    assert form["file"] == "data:image/png;base64,AAAA"
    assert form["api_key"] == "1234"
    assert form["folder"] == "avatars"
    assert "shhh" not in request.content.decode()
    assert form["signature"] == sign_params(
        {"folder": form["folder"], "timestamp": form["timestamp"]}, "shhh"
    )


def test_bare_base64_is_sent_as_data_uri():
    seen = []

    def handler(request):
        seen.append(form_of(request))
        return httpx.Response(200, json={"secure_url": "x", "created_at": "y"})

    asyncio.run(make_client(handler).upload("AAAA"))

    assert seen[0]["file"] == "data:image/png;base64,AAAA"


def test_provider_error_status_raises():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "Invalid image file"}})

    with pytest.raises(ImageUploadError) as excinfo:
        asyncio.run(make_client(handler).upload("AAAA"))

    assert "Invalid image file" in excinfo.value.message
    assert excinfo.value.details == {"provider_status": 400}
    assert excinfo.value.status_code == 502


def test_unreadable_success_body_raises():
    def handler(request):
        return httpx.Response(200, text="<html>proxy</html>")

    with pytest.raises(ImageUploadError) as excinfo:
        asyncio.run(make_client(handler).upload("AAAA"))

    assert excinfo.value.message == "Image host sent an unreadable response"
    assert excinfo.value.status_code == 502


def test_unreachable_host_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ImageUploadError):
        asyncio.run(make_client(handler).upload("AAAA"))


def test_unconfigured_client_refuses_without_network():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(ImageUploadError) as excinfo:
        asyncio.run(make_client(handler, cloud_name="").upload("AAAA"))

    assert excinfo.value.status_code == 503
    assert calls == []
