import asyncio
import json
import sys
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).parent.parent))

from eureka.models import IdeaRecord
from eureka.presenton import PresentonClient, get_presenton_client


IDEA = IdeaRecord.model_validate({
    "title": "Campus Compost Loop",
    "problem": "Food waste",
    "mvpTime": "6 weeks",
    "ratings": {"publicImpact": 4},
})


def make_client(handler, base_url="http://presenton.local/"):
    return PresentonClient(base_url, transport=httpx.MockTransport(handler))


def test_success_returns_body_unchanged():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, content=b"PK\x03\x04deck")

    content = asyncio.run(make_client(handler).generate(IDEA))

    assert content == b"PK\x03\x04deck"
    assert seen["url"] == "http://presenton.local/api/generate"
    assert seen["payload"] == {
        "title": "Campus Compost Loop",
        "problem": "Food waste",
        "validation": [],
        "mvpTime": "6 weeks",
        "ratings": {"publicImpact": 4.0},
        "notes": [],
        "format": "pptx",
    }


def test_non_success_status_returns_none():
    client = make_client(lambda request: httpx.Response(502, text="bad gateway"))
    assert asyncio.run(client.generate(IDEA)) is None


def test_transport_error_returns_none():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert asyncio.run(make_client(handler).generate(IDEA)) is None


def test_client_from_environment(monkeypatch):
    monkeypatch.delenv("PRESENTON_URL", raising=False)
    assert get_presenton_client() is None

    monkeypatch.setenv("PRESENTON_URL", "http://deck.example:5000/")
    client = get_presenton_client()
    assert client.generate_url == "http://deck.example:5000/api/generate"
