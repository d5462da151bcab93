"""Service-level helpers for creating, editing, listing and reacting to posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ideaboard.core.errors import NotFound, PermissionDenied, ValidationFailed
from ideaboard.models import Post, User
from ideaboard.repositories import PostFilters, PostRepository
from ideaboard.repositories.post_repo import SORT_FIELDS
from ideaboard.schemas.post import PostCreate, PostUpdate
from ideaboard.services.reactions import ReactionOutcome, toggle_reaction

logger = logging.getLogger(__name__)

# snake_case spellings accepted alongside the public camelCase sort keys.
_SORT_ALIASES = {
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "is_pinned": "isPinned",
}


def build_filters(
    *,
    page: int,
    limit: int,
    sort_by: str | None,
    sort_order: str | None,
    post_type: str | None,
    author_id: int | None,
    tags: str | None,
) -> PostFilters:
    """Translate raw query-string values into :class:`PostFilters`.

    Raises:
        ValidationFailed: If ``sort_by`` is not a sortable field.
    """
    sort_key = sort_by or "createdAt"
    sort_key = _SORT_ALIASES.get(sort_key, sort_key)
    if sort_key not in SORT_FIELDS:
        raise ValidationFailed(
            f"sortBy must be one of: {', '.join(sorted(SORT_FIELDS))}"
        )

    tag_list: list[str] = []
    if tags:
        for tag in tags.split(","):
            tag = tag.strip().lower()
            if tag and tag not in tag_list:
                tag_list.append(tag)

    return PostFilters(
        page=page,
        limit=limit,
        sort_by=sort_key,
        ascending=sort_order == "asc",
        type=None if post_type in (None, "", "all") else post_type,
        author_id=author_id,
        tags=tag_list,
    )


def list_posts(db: Session, filters: PostFilters) -> tuple[list[Post], int]:
    return PostRepository(db).list(filters)


def list_user_posts(db: Session, author_id: int) -> list[Post]:
    return PostRepository(db).list_by_author(author_id)


def get_active_post(db: Session, post_id: int) -> Post:
    """Return an active post or raise :class:`NotFound`."""
    post = PostRepository(db).get_active(post_id)
    if post is None:
        raise NotFound("Post not found")
    return post


def _get_owned_post(db: Session, post_id: int, user: User, action: str) -> Post:
    post = get_active_post(db, post_id)
    if post.author_id != user.id:
        raise PermissionDenied(f"Not authorized to {action} this post")
    return post


def create_post(db: Session, author: User, data: PostCreate) -> Post:
    post = Post(
        title=data.title,
        content=data.content,
        type=data.type,
        author_id=author.id,
    )
    post.tags = data.tags
    PostRepository(db).add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", author.id, post.id)
    return post


def update_post(db: Session, post_id: int, user: User, data: PostUpdate) -> Post:
    """Edit title, content, type or tags; only the author may do so."""
    post = _get_owned_post(db, post_id, user, "edit")

    if data.title:
        post.title = data.title
    if data.content:
        post.content = data.content
    if data.type:
        post.type = data.type
    if data.tags is not None:
        post.tags = data.tags

    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post_id: int, user: User) -> None:
    """Soft-delete a post; only the author may do so."""
    post = _get_owned_post(db, post_id, user, "delete")
    post.is_active = False
    db.commit()
    logger.info("User %s deleted post %s", user.id, post_id)


def record_view(db: Session, post_id: int, viewer: User | None) -> int:
    """Count a view unless the viewer is the author; return the current total.

    Repeated views by the same viewer are all counted.
    """
    post = get_active_post(db, post_id)
    if viewer is not None and viewer.id == post.author_id:
        return post.views

    views = PostRepository(db).increment_views(post_id)
    db.commit()
    return views


def react_to_post(db: Session, post_id: int, user: User, kind: int) -> tuple[Post, ReactionOutcome]:
    post = get_active_post(db, post_id)
    outcome = toggle_reaction(db, post, user.id, kind)
    return post, outcome
