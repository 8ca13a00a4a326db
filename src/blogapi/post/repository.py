import logging
from datetime import datetime
from typing import List, Optional

from blogapi.db import Database
from blogapi.post.models import Author, BlogPost

logger = logging.getLogger(__name__)


class PostRepository:
    """
    Repository for blog post data access.
    Encapsulates all SQL and queries for the blog_posts table.
    """

    def __init__(self, database: Database):
        self.db = database

    def list_all(self) -> List[BlogPost]:
        """List every post in insertion order."""
        rows = self.db.fetch_all("SELECT * FROM blog_posts ORDER BY id")
        return [BlogPost.from_row(row) for row in rows]

    def count(self) -> int:
        """Number of stored posts."""
        return self.db.fetch_value("SELECT COUNT(*) AS n FROM blog_posts")

    def find_by_id(self, post_id: int) -> Optional[BlogPost]:
        """Get a post by ID, or None if it does not exist."""
        row = self.db.fetch_one("SELECT * FROM blog_posts WHERE id = %s", (post_id,))
        return BlogPost.from_row(row) if row else None

    def create(
        self,
        author: Author,
        title: str,
        content: str,
        created: datetime = None,
    ) -> BlogPost:
        """Create a new post. ``created`` defaults to the current time."""
        row = self.db.fetch_one(
            """
            INSERT INTO blog_posts (author_first_name, author_last_name, title, content, created)
            VALUES (%s, %s, %s, %s, COALESCE(%s, now()))
            RETURNING *
            """,
            (author.first_name, author.last_name, title, content, created),
        )
        post = BlogPost.from_row(row)
        logger.info("Created post %s", post.id)
        return post

    def insert_many(self, posts: List[dict]) -> List[BlogPost]:
        """
        Insert several posts in a single transaction.

        Each item uses the request shape produced by ``blogapi.seed``:
        ``{"author": {"firstName", "lastName"}, "title", "content", "created"?}``.
        """
        created = []
        with self.db.get_cursor() as cur:
            for post in posts:
                cur.execute(
                    """
                    INSERT INTO blog_posts
                        (author_first_name, author_last_name, title, content, created)
                    VALUES (%s, %s, %s, %s, COALESCE(%s, now()))
                    RETURNING *
                    """,
                    (
                        post["author"]["firstName"],
                        post["author"]["lastName"],
                        post["title"],
                        post["content"],
                        post.get("created"),
                    ),
                )
                created.append(BlogPost.from_row(cur.fetchone()))

        logger.debug("Inserted %d posts", len(created))
        return created

    def update_by_id(
        self,
        post_id: int,
        title: str = None,
        content: str = None,
    ) -> Optional[BlogPost]:
        """
        Replace the title and/or content of a post.
        Fields left as None keep their stored value. Returns None if the post does not exist.
        """
        row = self.db.fetch_one(
            """
            UPDATE blog_posts
            SET title = COALESCE(%s, title),
                content = COALESCE(%s, content)
            WHERE id = %s
            RETURNING *
            """,
            (title, content, post_id),
        )
        if row is None:
            return None
        logger.info("Updated post %s", post_id)
        return BlogPost.from_row(row)

    def delete_by_id(self, post_id: int) -> bool:
        """Delete a post. Returns False if it did not exist."""
        deleted = self.db.execute("DELETE FROM blog_posts WHERE id = %s", (post_id,))
        if deleted:
            logger.info("Deleted post %s", post_id)
        return deleted > 0

    def clear(self) -> int:
        """Remove every post. Returns the number of rows removed."""
        # DELETE rather than TRUNCATE ... RESTART IDENTITY: ids keep increasing
        removed = self.db.execute("DELETE FROM blog_posts")
        logger.debug("Cleared %d posts", removed)
        return removed
