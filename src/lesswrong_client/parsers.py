from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .errors import DecodeError, NotFound
from .models import Comment, Post, User

ANONYMOUS_AUTHOR = "anonymous"


def extract_graphql_errors(payload: Any) -> List[str]:
    if not isinstance(payload, dict):
        return []
    errors = payload.get("errors") or []
    if not isinstance(errors, list):
        return [str(errors)]
    out: List[str] = []
    for err in errors:
        if isinstance(err, dict):
            out.append(str(err.get("message") or err))
        else:
            out.append(str(err))
    return out


def _require_str(obj: Dict[str, Any], key: str, path: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"{path}.{key}", f"expected string, got {type(value).__name__}")
    return value


def _require_id(obj: Dict[str, Any], path: str) -> str:
    value = obj.get("_id")
    if not isinstance(value, str) or not value:
        raise DecodeError(f"{path}._id", "expected non-empty string")
    return value


def _optional_str(obj: Dict[str, Any], key: str, path: str) -> Optional[str]:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"{path}.{key}", f"expected string or null, got {type(value).__name__}")
    return value


def _is_number(value: Any) -> bool:
    # bool is an int subclass; never accept it as a score
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_number(obj: Dict[str, Any], key: str, path: str) -> float:
    value = obj.get(key)
    if not _is_number(value):
        raise DecodeError(f"{path}.{key}", f"expected number, got {type(value).__name__}")
    return float(value)


def _optional_int(obj: Dict[str, Any], key: str, path: str) -> Optional[int]:
    value = obj.get(key)
    if value is None:
        return None
    if not _is_number(value):
        raise DecodeError(f"{path}.{key}", f"expected number or null, got {type(value).__name__}")
    return int(value)


def parse_datetime(value: Any, path: str) -> datetime:
    """Parse an ISO-8601 timestamp such as `2006-01-01T08:00:05.370Z` into an aware UTC datetime."""
    if not isinstance(value, str) or not value:
        raise DecodeError(path, "expected ISO-8601 timestamp")
    raw = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError as e:
        raise DecodeError(path, f"bad timestamp {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _markdown(obj: Dict[str, Any], path: str) -> Optional[str]:
    contents = obj.get("contents")
    if contents is None:
        return None
    if not isinstance(contents, dict):
        raise DecodeError(f"{path}.contents", "expected object or null")
    return _optional_str(contents, "markdown", f"{path}.contents")


def parse_user(raw: Any, path: str) -> Optional[User]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise DecodeError(path, "expected object or null")
    return User(
        id=_require_id(raw, path),
        username=_optional_str(raw, "username", path),
        display_name=_optional_str(raw, "displayName", path),
        slug=_optional_str(raw, "slug", path),
        bio=_optional_str(raw, "bio", path),
    )


def parse_post(raw: Dict[str, Any], path: str = "post.result") -> Post:
    user = parse_user(raw.get("user"), f"{path}.user")
    author = _optional_str(raw, "author", path) or (user.display_name if user else None)
    if not author:
        raise DecodeError(f"{path}.author")

    return Post(
        id=_require_id(raw, path),
        title=_require_str(raw, "title", path),
        author=author,
        user=user,
        slug=_require_str(raw, "slug", path),
        page_url=_require_str(raw, "pageUrl", path),
        html_body=_require_str(raw, "htmlBody", path),
        markdown=_markdown(raw, path),
        base_score=_require_number(raw, "baseScore", path),
        comment_count=_optional_int(raw, "commentCount", path),
        word_count=_optional_int(raw, "wordCount", path),
        posted_at=parse_datetime(raw.get("postedAt"), f"{path}.postedAt"),
    )


def parse_comment(raw: Dict[str, Any], path: str) -> Comment:
    user = parse_user(raw.get("user"), f"{path}.user")
    author = _optional_str(raw, "author", path) or (user.display_name if user else None)
    vote_count = _optional_int(raw, "voteCount", path)
    if vote_count is None:
        raise DecodeError(f"{path}.voteCount")

    return Comment(
        id=_require_id(raw, path),
        post_id=_optional_str(raw, "postId", path),
        parent_comment_id=_optional_str(raw, "parentCommentId", path) or None,
        author=author or ANONYMOUS_AUTHOR,
        user=user,
        page_url=_require_str(raw, "pageUrl", path),
        html_body=_optional_str(raw, "htmlBody", path) or "",
        markdown=_markdown(raw, path),
        base_score=_require_number(raw, "baseScore", path),
        vote_count=vote_count,
        posted_at=parse_datetime(raw.get("postedAt"), f"{path}.postedAt"),
        deleted=bool(raw.get("deleted") or False),
    )


def _data(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError("<root>", "expected JSON object")
    data = payload.get("data")
    if not isinstance(data, dict):
        raise DecodeError("data", graphql_errors=extract_graphql_errors(payload))
    return data


def parse_post_response(payload: Any, post_id: str) -> Post:
    data = _data(payload)
    post = data.get("post")
    if post is None:
        raise NotFound(post_id)
    if not isinstance(post, dict):
        raise DecodeError("post", "expected object")
    result = post.get("result")
    if result is None:
        raise NotFound(post_id)
    if not isinstance(result, dict):
        raise DecodeError("post.result", "expected object")
    return parse_post(result)


def is_visible_comment(raw: Dict[str, Any]) -> bool:
    """
    Deleted comments and comments without an HTML body are notices like
    "[This comment is no longer endorsed by its author]"; they carry no content.
    """
    if raw.get("deleted"):
        return False
    return bool(raw.get("htmlBody"))


def parse_comments_response(payload: Any, *, include_deleted: bool = False) -> List[Comment]:
    data = _data(payload)
    comments = data.get("comments")
    if not isinstance(comments, dict):
        raise DecodeError("comments", graphql_errors=extract_graphql_errors(payload))
    results = comments.get("results")
    if not isinstance(results, list):
        raise DecodeError("comments.results", "expected list")

    out: List[Comment] = []
    for i, raw in enumerate(results):
        if raw is None:
            continue
        path = f"comments.results[{i}]"
        if not isinstance(raw, dict):
            raise DecodeError(path, "expected object")
        if not include_deleted and not is_visible_comment(raw):
            continue
        out.append(parse_comment(raw, path))
    return out
