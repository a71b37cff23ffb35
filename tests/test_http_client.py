import httpx
import pytest

from core.http_client import HttpError, fetch_json


def test_fetch_json_retries_transport_errors_then_succeeds():
    attempts = {"n": 0}

    def handler(request):
        attempts["n"] += 1
        if attempts["n"] < 3:
            raise httpx.ConnectTimeout("slow", request=request)
        return httpx.Response(200, json=[1, 2])

    client = httpx.Client(transport=httpx.MockTransport(handler))
    assert fetch_json("http://x.test/", client=client, retries=2, backoff_factor=0) == [1, 2]
    assert attempts["n"] == 3


def test_fetch_json_gives_up_after_retries():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(HttpError) as info:
        fetch_json("http://x.test/", client=client, retries=1, backoff_factor=0)
    assert info.value.status_code is None


def test_fetch_json_error_status_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(404, json={"message": "missing"})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(HttpError) as info:
        fetch_json("http://x.test/", client=client, retries=3, backoff_factor=0)
    assert len(calls) == 1
    assert info.value.status_code == 404
    assert info.value.payload == {"message": "missing"}


def test_fetch_json_invalid_body():
    transport = httpx.MockTransport(lambda r: httpx.Response(200, text="<html>"))
    client = httpx.Client(transport=transport)
    with pytest.raises(HttpError):
        fetch_json("http://x.test/", client=client, retries=0)
