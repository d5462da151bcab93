# src/ideaboard/api/v1/endpoints/comments.py
"""Comment endpoints nested under posts."""

from fastapi import APIRouter, status

from ideaboard.api.v1.dependencies import CurrentUserDep, SessionDep
from ideaboard.models import DISLIKE, LIKE
from ideaboard.schemas.comment import (
    CommentCreate,
    CommentMutationResponse,
    CommentResponse,
    CommentUpdate,
)
from ideaboard.services import comments as comment_service
from ideaboard.services.posts import get_active_post
from ideaboard.services.reactions import reaction_message

router = APIRouter(prefix="/posts", tags=["comments"])


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(post_id: int, db: SessionDep) -> list[CommentResponse]:
    """Active comments on a post, oldest first."""
    get_active_post(db, post_id)
    return [CommentResponse.model_validate(c) for c in comment_service.list_comments(db, post_id)]


@router.post(
    "/{post_id}/comments",
    response_model=CommentMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentMutationResponse:
    comment = comment_service.add_comment(db, post_id, current_user, payload.content)
    return CommentMutationResponse(
        message="Comment added successfully",
        comment=CommentResponse.model_validate(comment),
    )


@router.put("/{post_id}/comments/{comment_id}", response_model=CommentMutationResponse)
async def update_comment(
    post_id: int,
    comment_id: int,
    payload: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentMutationResponse:
    """Edit a comment body (comment author only)."""
    comment = comment_service.update_comment(
        db, post_id, comment_id, current_user, payload.content
    )
    return CommentMutationResponse(
        message="Comment updated successfully",
        comment=CommentResponse.model_validate(comment),
    )


@router.post("/{post_id}/comments/{comment_id}/like", response_model=CommentMutationResponse)
async def like_comment(
    post_id: int,
    comment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentMutationResponse:
    comment, outcome = comment_service.react_to_comment(
        db, post_id, comment_id, current_user, LIKE
    )
    return CommentMutationResponse(
        message=reaction_message("Comment", LIKE, outcome),
        comment=CommentResponse.model_validate(comment),
    )


@router.post("/{post_id}/comments/{comment_id}/dislike", response_model=CommentMutationResponse)
async def dislike_comment(
    post_id: int,
    comment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentMutationResponse:
    comment, outcome = comment_service.react_to_comment(
        db, post_id, comment_id, current_user, DISLIKE
    )
    return CommentMutationResponse(
        message=reaction_message("Comment", DISLIKE, outcome),
        comment=CommentResponse.model_validate(comment),
    )
