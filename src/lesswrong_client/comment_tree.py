from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List

from .models import Comment


@dataclass
class CommentThread:
    comment: Comment
    depth: int = 0  # 0 for roots
    replies: List["CommentThread"] = field(default_factory=list)

    def walk(self) -> Iterator["CommentThread"]:
        """Depth-first, parent before its replies."""
        yield self
        for reply in self.replies:
            yield from reply.walk()

    def size(self) -> int:
        return sum(1 for _ in self.walk())


def index_by_id(comments: Iterable[Comment]) -> Dict[str, Comment]:
    return {c.id: c for c in comments}


def dangling_parents(comments: Iterable[Comment]) -> List[Comment]:
    """Comments that reference a parent not present in the given set."""
    comments = list(comments)
    ids = set(c.id for c in comments)
    return [c for c in comments if c.parent_comment_id is not None and c.parent_comment_id not in ids]


def parent_cycles(comments: Iterable[Comment]) -> List[Comment]:
    """Comments whose chain of parents loops back on itself."""
    comments = list(comments)
    index = index_by_id(comments)
    out: List[Comment] = []
    for c in comments:
        seen = set()
        pid = c.parent_comment_id
        while pid is not None and pid in index and pid not in seen:
            if pid == c.id:
                out.append(c)
                break
            seen.add(pid)
            pid = index[pid].parent_comment_id
    return out


def build_threads(comments: Iterable[Comment]) -> List[CommentThread]:
    """
    Assemble reply trees from parent back-references.
    Sibling order follows input order. A comment whose parent was not fetched
    (e.g. cut off by the limit) becomes a root of its own thread, and so does
    the first comment met on a parent cycle.
    """
    comments = list(comments)
    nodes: Dict[str, CommentThread] = {}
    for c in comments:
        nodes.setdefault(c.id, CommentThread(comment=c))

    roots: List[CommentThread] = []
    for c in comments:
        node = nodes[c.id]
        if node.comment is not c:
            # duplicate id; first occurrence wins
            continue
        parent = nodes.get(c.parent_comment_id) if c.parent_comment_id else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.replies.append(node)

    # nodes on a parent cycle are unreachable from any root; cut the link
    # into the first one seen and promote it
    reached = set(id(t) for root in roots for t in root.walk())
    for c in comments:
        node = nodes[c.id]
        if node.comment is not c or id(node) in reached:
            continue
        parent = nodes[c.parent_comment_id]
        parent.replies = [r for r in parent.replies if r is not node]
        roots.append(node)
        reached.update(id(t) for t in node.walk())

    for root in roots:
        for node in root.walk():
            for reply in node.replies:
                reply.depth = node.depth + 1
    return roots
