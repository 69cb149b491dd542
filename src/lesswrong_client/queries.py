import json
from typing import Any, Dict

USER_FIELDS = """
      user {
        _id
        username
        displayName
        slug
        bio
      }"""

POST_QUERY = (
    """query PostQuery($id: String) {
  post(input: {selector: {_id: $id}}) {
    result {
      _id
      title
      author
      slug
      pageUrl
      htmlBody
      contents {
        markdown
      }
      baseScore
      commentCount
      wordCount
      postedAt"""
    + USER_FIELDS
    + """
    }
  }
}
"""
)

COMMENTS_QUERY = (
    """query CommentsQuery($terms: JSON) {
  comments(input: {terms: $terms}) {
    results {
      _id
      postId
      parentCommentId
      author
      pageUrl
      htmlBody
      contents {
        markdown
      }
      baseScore
      voteCount
      postedAt
      deleted"""
    + USER_FIELDS
    + """
    }
  }
}
"""
)


def post_variables(post_id: str) -> Dict[str, Any]:
    return {"id": post_id}


def comments_variables(post_id: str, limit: int, view: str) -> Dict[str, Any]:
    return {"terms": {"view": view, "postId": post_id, "limit": limit}}


def build_request_body(query: str, variables: Dict[str, Any]) -> bytes:
    """
    Serialize a GraphQL request as `{"query": ..., "variables": ...}`.
    Keys are sorted and separators compact, so equal inputs give equal bytes.
    """
    payload = {"query": query, "variables": variables}
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
