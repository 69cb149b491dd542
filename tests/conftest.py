"""
Shared fixtures: canned GraphQL payloads shaped like the LessWrong
responses, and an API client wired to an in-process httpx transport.
"""

import json

import httpx
import pytest

from lesswrong_client.lesswrong_api import LessWrongApiClient

POST_ID = "7ZqGiPHTpiDMwqMN2"


def make_user(uid="nmk3nLpQE89dMRzzN", display_name="Eliezer Yudkowsky"):
    return {
        "_id": uid,
        "username": "Eliezer_Yudkowsky",
        "displayName": display_name,
        "slug": "eliezer_yudkowsky",
        "bio": None,
    }


def make_post(post_id=POST_ID, **overrides):
    raw = {
        "_id": post_id,
        "title": "Twelve Virtues of Rationality",
        "author": "Eliezer Yudkowsky",
        "slug": "twelve-virtues-of-rationality",
        "pageUrl": f"https://www.lesswrong.com/posts/{post_id}/twelve-virtues-of-rationality",
        "htmlBody": "<p>The first virtue is curiosity.</p>",
        "contents": {"markdown": "The first virtue is curiosity."},
        "baseScore": 412,
        "commentCount": 3,
        "wordCount": 2228,
        "postedAt": "2006-01-01T08:00:05.370Z",
        "user": make_user(),
    }
    raw.update(overrides)
    return raw


def make_comment(cid, parent=None, **overrides):
    raw = {
        "_id": cid,
        "postId": POST_ID,
        "parentCommentId": parent,
        "author": "commenter",
        "pageUrl": f"https://www.lesswrong.com/posts/{POST_ID}?commentId={cid}",
        "htmlBody": f"<p>comment {cid}</p>",
        "contents": {"markdown": f"comment {cid}"},
        "baseScore": 10,
        "voteCount": 4,
        "postedAt": "2009-03-05T12:00:00.000Z",
        "deleted": False,
        "user": make_user(uid=f"u-{cid}", display_name="commenter"),
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def post_payload():
    return {"data": {"post": {"result": make_post()}}}


@pytest.fixture
def comments_payload():
    return {
        "data": {
            "comments": {
                "results": [
                    make_comment("c1"),
                    make_comment("c2", parent="c1"),
                    make_comment("c3"),
                    make_comment("c4", parent="c2"),
                ]
            }
        }
    }


class Recorder:
    """Collects every request the mock transport sees."""

    def __init__(self, responder):
        self.responder = responder
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def bodies(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def make_api():
    """
    make_api(responder) -> (api, recorder)

    `responder` is either a payload (returned as JSON with status 200)
    or a callable taking an httpx.Request and returning an httpx.Response.
    """

    def _make(responder, **kwargs):
        if not callable(responder):
            payload = responder
            responder = lambda request: httpx.Response(200, json=payload)  # noqa: E731
        recorder = Recorder(responder)
        client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        return LessWrongApiClient(client=client, **kwargs), recorder

    return _make
