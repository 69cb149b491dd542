from typing import Any, Dict, List, Optional

import httpx

from .config import COMMENTS_VIEW, LESSWRONG_GRAPHQL_URL, LESSWRONG_TIMEOUT, LESSWRONG_USER_AGENT
from .errors import DecodeError, ServerError, TransportError
from .models import Comment, Post
from .parsers import parse_comments_response, parse_post_response
from .queries import COMMENTS_QUERY, POST_QUERY, build_request_body, comments_variables, post_variables


class LessWrongApiClient:
    """
    Read-only client for the LessWrong GraphQL endpoint:
    - Post:     post(input: {selector: {_id}})
    - Comments: comments(input: {terms: {view, postId, limit}})

    One POST per call, no retries, no pagination.
    """

    def __init__(
        self,
        *,
        endpoint: str = LESSWRONG_GRAPHQL_URL,
        timeout: float = LESSWRONG_TIMEOUT,
        user_agent: str = LESSWRONG_USER_AGENT,
        comments_view: str = COMMENTS_VIEW,
        client: Optional[httpx.AsyncClient] = None,
        log_callback=None,
    ):
        self._log = log_callback or (lambda msg, lvl="info": None)
        self.endpoint = endpoint
        self.comments_view = comments_view
        self._headers = {
            "User-Agent": user_agent,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def close(self):
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "LessWrongApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _post_json(self, query: str, variables: Dict[str, Any]) -> Any:
        body = build_request_body(query, variables)
        try:
            resp = await self.client.post(self.endpoint, content=body, headers=self._headers)
        except httpx.HTTPError as e:
            self._log(f"request error: {e}", "error")
            raise TransportError(f"HTTP request failed: {e}") from e

        if not resp.is_success:
            self._log(f"http {resp.status_code}: {self.endpoint}", "warning")
            raise ServerError(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError("<root>", f"response is not JSON: {e}") from e

    async def get_post(self, post_id: str) -> Post:
        if not post_id:
            raise ValueError("post_id must be a non-empty string")

        payload = await self._post_json(POST_QUERY, post_variables(post_id))
        post = parse_post_response(payload, post_id)
        self._log(f"post {post_id}: '{post.title[:80]}' by {post.author}")
        return post

    async def get_comments(self, post_id: str, limit: int, *, include_deleted: bool = False) -> List[Comment]:
        """
        Fetch up to `limit` comments of a post in the "top" view order.
        Deleted and body-less comments are dropped unless `include_deleted` is set,
        so fewer than `limit` may come back even when the post has more.
        """
        if not post_id:
            raise ValueError("post_id must be a non-empty string")
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        if limit == 0:
            return []

        variables = comments_variables(post_id, limit, self.comments_view)
        payload = await self._post_json(COMMENTS_QUERY, variables)
        comments = parse_comments_response(payload, include_deleted=include_deleted)[:limit]
        self._log(f"post {post_id}: comments fetched={len(comments)} limit={limit}")
        return comments
