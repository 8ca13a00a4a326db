"""
Post records and their mapping to the external JSON representation.

Stored rows carry the author as two columns; the API only ever shows the
flattened display name. Both directions of that mapping live here so they
can be tested without going through HTTP.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from blogapi.errors import ValidationFailure


@dataclass(frozen=True)
class Author:
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class BlogPost:
    id: int
    author: Author
    title: str
    content: str
    created: datetime

    @classmethod
    def from_row(cls, row: dict) -> "BlogPost":
        """Build a BlogPost from a blog_posts row."""
        return cls(
            id=row["id"],
            author=Author(
                first_name=row["author_first_name"],
                last_name=row["author_last_name"],
            ),
            title=row["title"],
            content=row["content"],
            created=row["created"],
        )


def to_api(post: BlogPost) -> dict:
    """External representation of a post, with the author flattened."""
    return {
        "id": post.id,
        "author": post.author.full_name,
        "title": post.title,
        "content": post.content,
    }


# =============================================================================
# Request Parsing
# =============================================================================


def _require_text(body: dict, field: str, label: str | None = None) -> str:
    label = label or field
    if field not in body or body[field] is None:
        raise ValidationFailure(f'Missing "{label}" in request body', field=label)
    value = body[field]
    if not isinstance(value, str):
        raise ValidationFailure(f'"{label}" must be a string', field=label)
    if not value.strip():
        raise ValidationFailure(f'"{label}" must not be empty', field=label)
    return value


def parse_create_request(body: Any) -> dict:
    """
    Validate a POST /posts body.

    Expects ``{"author": {"firstName", "lastName"}, "title", "content"}``.

    Returns:
        dict with ``author`` (an Author), ``title`` and ``content``

    Raises:
        ValidationFailure: naming the first missing or malformed field
    """
    if not isinstance(body, dict):
        raise ValidationFailure("Request body must be a JSON object")

    title = _require_text(body, "title")
    content = _require_text(body, "content")

    author = body.get("author")
    if author is None:
        raise ValidationFailure('Missing "author" in request body', field="author")
    if not isinstance(author, dict):
        raise ValidationFailure(
            '"author" must be an object with "firstName" and "lastName"', field="author"
        )

    return {
        "author": Author(
            first_name=_require_text(author, "firstName", "author.firstName"),
            last_name=_require_text(author, "lastName", "author.lastName"),
        ),
        "title": title,
        "content": content,
    }


def parse_update_request(post_id: int, body: Any) -> dict:
    """
    Validate a PUT /posts/<id> body.

    The body must repeat the path id. Only ``title`` and ``content`` are
    updatable; any other keys are ignored.

    Returns:
        dict holding whichever of ``title`` / ``content`` were supplied
    """
    if not isinstance(body, dict):
        raise ValidationFailure("Request body must be a JSON object")

    body_id = body.get("id")
    if body_id is None or str(body_id) != str(post_id):
        raise ValidationFailure(
            f"Request path id ({post_id}) and request body id ({body_id}) must match",
            field="id",
        )

    updates = {}
    for field in ("title", "content"):
        if field in body:
            updates[field] = _require_text(body, field)
    return updates
