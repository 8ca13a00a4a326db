from flask import Blueprint, current_app, jsonify, request

from blogapi.post.models import parse_create_request, parse_update_request, to_api
from blogapi.post.repository import PostRepository

bp = Blueprint("posts", __name__)

# Anything outside BIGINT range can never be a stored id
POST_ID = "/<int(max=9223372036854775807):post_id>"


def post_repo() -> PostRepository:
    return current_app.post_repository


@bp.route("", methods=["GET"])
def list_posts():
    """List all posts."""
    posts = post_repo().list_all()
    return jsonify([to_api(post) for post in posts])


@bp.route(POST_ID, methods=["GET"])
def get_post(post_id: int):
    """Get post by ID."""
    post = post_repo().find_by_id(post_id)
    if not post:
        return jsonify({"error": "Post not found"}), 404
    return jsonify(to_api(post))


@bp.route("", methods=["POST"])
def create_post():
    """Create a new post."""
    fields = parse_create_request(request.get_json(silent=True))
    post = post_repo().create(**fields)
    return jsonify(to_api(post)), 201


@bp.route(POST_ID, methods=["PUT"])
def update_post(post_id: int):
    """Replace the title and/or content of a post."""
    updates = parse_update_request(post_id, request.get_json(silent=True))
    post = post_repo().update_by_id(post_id, **updates)
    if not post:
        return jsonify({"error": "Post not found"}), 404
    return "", 204


@bp.route(POST_ID, methods=["DELETE"])
def delete_post(post_id: int):
    """Delete a post."""
    if not post_repo().delete_by_id(post_id):
        return jsonify({"error": "Post not found"}), 404
    return "", 204
