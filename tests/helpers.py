"""Canned Yandex Cloud responses and fakes shared by the tests."""

import base64
from typing import List

import httpx


class RecordingTransport:
    """
    Queue of canned responses served through httpx.MockTransport.

    Each queued item is an httpx.Response or a callable taking the request
    (use a callable to raise transport errors). Every request is recorded.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self.responses.pop(0)
        if callable(response):
            return response(request)
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class FakeSleep:
    """Records requested delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def completion(text: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "result": {
                "alternatives": [
                    {"message": {"role": "assistant", "text": text}, "status": "ALTERNATIVE_STATUS_FINAL"}
                ],
                "modelVersion": "latest",
            }
        },
    )


def submitted(operation_id: str = "op-1") -> httpx.Response:
    return httpx.Response(200, json={"id": operation_id, "done": False})


def operation_done(image: bytes) -> httpx.Response:
    return httpx.Response(
        200,
        json={"id": "op-1", "done": True, "response": {"image": base64.b64encode(image).decode()}},
    )


def operation_pending() -> httpx.Response:
    return httpx.Response(200, json={"id": "op-1", "done": False})
