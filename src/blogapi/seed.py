"""Random blog post generation and bulk seeding."""

import logging
from datetime import timezone

from faker import Faker

from blogapi.post.models import BlogPost
from blogapi.post.repository import PostRepository

logger = logging.getLogger(__name__)

fake = Faker()


def generate_random_post(faker: Faker = None) -> dict:
    """
    Produce a valid random post.

    The result is shaped like a POST /posts body plus a ``created``
    timestamp from the last 30 days, so it can be sent to the API
    (drop ``created``) or handed straight to ``PostRepository.insert_many``.
    """
    faker = faker or fake
    return {
        "author": {
            "firstName": faker.first_name(),
            "lastName": faker.last_name(),
        },
        "title": faker.sentence(),
        "content": faker.paragraph(nb_sentences=5),
        "created": faker.date_time_between(start_date="-30d", tzinfo=timezone.utc),
    }


def seed(repository: PostRepository, n: int, faker: Faker = None) -> list[BlogPost]:
    """Insert ``n`` random posts and return them with their assigned ids."""
    if n < 0:
        raise ValueError(f"Cannot seed a negative number of posts: {n}")

    posts = [generate_random_post(faker) for _ in range(n)]
    inserted = repository.insert_many(posts)
    logger.info("Seeded %d posts", len(inserted))
    return inserted


def teardown(repository: PostRepository) -> int:
    """Remove every stored post so the next scenario starts empty."""
    removed = repository.clear()
    logger.info("Tore down %d posts", removed)
    return removed
