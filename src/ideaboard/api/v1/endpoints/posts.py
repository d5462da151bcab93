# src/ideaboard/api/v1/endpoints/posts.py
"""Post-related endpoints for the Ideaboard API."""

from fastapi import APIRouter, Query, status

from ideaboard.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from ideaboard.core.settings import settings
from ideaboard.models import DISLIKE, LIKE
from ideaboard.schemas.common import MessageResponse, PostPagination
from ideaboard.schemas.post import (
    PostCreate,
    PostListResponse,
    PostMutationResponse,
    PostResponse,
    PostUpdate,
    ViewResponse,
)
from ideaboard.schemas.stats import PlatformStats
from ideaboard.services import posts as post_service
from ideaboard.services import stats as stats_service
from ideaboard.services.reactions import reaction_message

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=PostListResponse)
async def list_posts(
    db: SessionDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Posts per page",
    ),
    sort_by: str | None = Query(None, alias="sortBy", description="Field to sort by"),
    sort_order: str | None = Query(None, alias="sortOrder", description="'asc' or 'desc'"),
    post_type: str | None = Query(None, alias="type", description="question, idea or discussion"),
    author: int | None = Query(None, description="Only posts by this user id"),
    tags: str | None = Query(None, description="Comma-separated tags, any may match"),
) -> PostListResponse:
    """List active posts with filtering, sorting and offset pagination.

    Args:
        db: Database session
        page: Page number (starting at 1)
        limit: Page size, capped by MAX_PAGE_SIZE
        sort_by: Sort key; defaults to creation time
        sort_order: ``asc`` for ascending, anything else for descending
        post_type: Category filter (``all`` disables it)
        author: Author id filter
        tags: Comma-separated tags, matching any

    Returns:
        The page of posts and pagination metadata
    """
    filters = post_service.build_filters(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        post_type=post_type,
        author_id=author,
        tags=tags,
    )
    posts, total = post_service.list_posts(db, filters)
    return PostListResponse(
        posts=[PostResponse.model_validate(post) for post in posts],
        pagination=PostPagination.build(page=page, limit=limit, total=total, total_posts=total),
    )


@router.get("/stats", response_model=PlatformStats)
async def get_platform_stats(db: SessionDep) -> PlatformStats:
    """Counts of active posts, users and comments, computed on each request."""
    return stats_service.platform_stats(db)


@router.get("/user/{user_id}", response_model=list[PostResponse])
async def list_user_posts(user_id: int, db: SessionDep) -> list[PostResponse]:
    """All active posts by one user, newest first."""
    return [PostResponse.model_validate(post) for post in post_service.list_user_posts(db, user_id)]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep) -> PostResponse:
    """Get a specific active post by ID."""
    return PostResponse.model_validate(post_service.get_active_post(db, post_id))


@router.post("/", response_model=PostMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostMutationResponse:
    post = post_service.create_post(db, current_user, payload)
    return PostMutationResponse(
        message="Post created successfully",
        post=PostResponse.model_validate(post),
    )


@router.put("/{post_id}", response_model=PostMutationResponse)
async def update_post(
    post_id: int,
    payload: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostMutationResponse:
    """Edit a post's title, content, type or tags (author only)."""
    post = post_service.update_post(db, post_id, current_user, payload)
    return PostMutationResponse(
        message="Post updated successfully",
        post=PostResponse.model_validate(post),
    )


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Soft-delete a post (author only)."""
    post_service.delete_post(db, post_id, current_user)
    return MessageResponse(message="Post deleted successfully")


@router.post("/{post_id}/view", response_model=ViewResponse)
async def view_post(
    post_id: int,
    db: SessionDep,
    current_user: OptionalUserDep,
) -> ViewResponse:
    """Count a view; the author's own views are not counted."""
    return ViewResponse(views=post_service.record_view(db, post_id, current_user))


@router.post("/{post_id}/like", response_model=PostMutationResponse)
async def like_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostMutationResponse:
    """Toggle the caller's like; liking clears an existing dislike."""
    post, outcome = post_service.react_to_post(db, post_id, current_user, LIKE)
    return PostMutationResponse(
        message=reaction_message("Post", LIKE, outcome),
        post=PostResponse.model_validate(post),
    )


@router.post("/{post_id}/dislike", response_model=PostMutationResponse)
async def dislike_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostMutationResponse:
    """Toggle the caller's dislike; disliking clears an existing like."""
    post, outcome = post_service.react_to_post(db, post_id, current_user, DISLIKE)
    return PostMutationResponse(
        message=reaction_message("Post", DISLIKE, outcome),
        post=PostResponse.model_validate(post),
    )
