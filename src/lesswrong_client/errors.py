from typing import List, Optional


class LessWrongError(Exception):
    """Base class for everything the client raises."""


class TransportError(LessWrongError):
    """The request never produced a usable HTTP response."""


class ServerError(TransportError):
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server error: status {status_code} - {body[:200]}")


class DecodeError(LessWrongError):
    """
    The response body is not the JSON shape we asked for.
    `field` is the dotted path of the first missing/malformed field.
    """

    def __init__(self, field: str, detail: str = "", graphql_errors: Optional[List[str]] = None):
        self.field = field
        self.graphql_errors = list(graphql_errors or [])
        msg = f"Malformatted response: missing/malformatted field {field}"
        if detail:
            msg = f"{msg} ({detail})"
        if self.graphql_errors:
            msg = f"{msg}; upstream errors: {'; '.join(self.graphql_errors)}"
        super().__init__(msg)


class NotFound(LessWrongError):
    def __init__(self, post_id: str):
        self.post_id = post_id
        super().__init__(f"Post not found: {post_id}")
