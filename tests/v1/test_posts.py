# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for creating, reading, editing, deleting and viewing posts."""

import pytest
from fastapi import status

VALID_POST = {
    "title": "How do I test this?",
    "content": "Looking for advice on testing APIs.",
    "type": "question",
    "tags": ["Python", " testing ", "python", ""],
}


def test_create_post_success(client, test_user, auth_token) -> None:
    """Creating a post stores it with normalized tags and empty reaction sets."""
    response = client.post("/api/v1/posts/", json=VALID_POST, headers=auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()

    assert data["message"] == "Post created successfully"
    post = data["post"]
    assert post["title"] == VALID_POST["title"]
    assert post["type"] == "question"
    assert post["tags"] == ["python", "testing"]
    assert post["author"]["id"] == test_user.id
    assert post["author"]["username"] == test_user.username
    assert post["likes"] == []
    assert post["dislikes"] == []
    assert post["likesCount"] == 0
    assert post["views"] == 0
    assert post["comments"] == []
    assert post["commentCount"] == 0
    assert post["isActive"] is True
    assert post["isPinned"] is False


def test_create_post_requires_auth(client) -> None:
    response = client.post("/api/v1/posts/", json=VALID_POST)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.parametrize(
    ("title", "expected_status"),
    [
        ("abcd", status.HTTP_400_BAD_REQUEST),
        ("abcde", status.HTTP_201_CREATED),
        ("   abcd   ", status.HTTP_400_BAD_REQUEST),
        ("x" * 200, status.HTTP_201_CREATED),
        ("x" * 201, status.HTTP_400_BAD_REQUEST),
    ],
)
def test_create_post_title_bounds(client, auth_token, title, expected_status) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={**VALID_POST, "title": title},
        headers=auth_token,
    )
    assert response.status_code == expected_status
    if expected_status == status.HTTP_400_BAD_REQUEST:
        assert response.json()["detail"] == "Title must be between 5 and 200 characters"


def test_create_post_content_too_short(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={**VALID_POST, "content": "too short"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Content must be between 10 and 10000 characters"


def test_create_post_invalid_type(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={**VALID_POST, "type": "rant"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_post_too_many_tags(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={**VALID_POST, "tags": [f"tag{i}" for i in range(11)]},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Maximum 10 tags allowed"


def test_create_post_missing_field(client, auth_token) -> None:
    payload = {key: value for key, value in VALID_POST.items() if key != "content"}
    response = client.post("/api/v1/posts/", json=payload, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "content: Field required"


def test_get_post(client, test_post) -> None:
    response = client.get(f"/api/v1/posts/{test_post.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == test_post.id
    assert data["tags"] == ["python", "testing"]


def test_get_post_not_found(client) -> None:
    response = client.get("/api/v1/posts/424242")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Post not found"


def test_get_inactive_post_is_not_found(client, make_post, test_user) -> None:
    post = make_post(test_user, is_active=False)
    response = client.get(f"/api/v1/posts/{post.id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUpdatePost:
    """Editing is restricted to the author."""

    def test_author_can_edit(self, client, test_post, auth_token) -> None:
        response = client.put(
            f"/api/v1/posts/{test_post.id}",
            json={"title": "A better title", "tags": ["Edited"]},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Post updated successfully"
        assert data["post"]["title"] == "A better title"
        assert data["post"]["tags"] == ["edited"]
        assert data["post"]["content"] == test_post.content

    def test_non_author_gets_403_and_post_is_unchanged(
        self, client, test_post, other_auth_token
    ) -> None:
        original_title = test_post.title
        response = client.put(
            f"/api/v1/posts/{test_post.id}",
            json={"title": "Hijacked title"},
            headers=other_auth_token,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Not authorized to edit this post"

        fetched = client.get(f"/api/v1/posts/{test_post.id}").json()
        assert fetched["title"] == original_title

    def test_admin_is_not_the_author(self, client, test_post, admin_auth_token) -> None:
        response = client.put(
            f"/api/v1/posts/{test_post.id}",
            json={"title": "Admin edit"},
            headers=admin_auth_token,
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_edit_validates_fields(self, client, test_post, auth_token) -> None:
        response = client.put(
            f"/api/v1/posts/{test_post.id}",
            json={"title": "abc"},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeletePost:
    def test_author_soft_deletes(self, client, test_post, auth_token, db_session) -> None:
        response = client.delete(f"/api/v1/posts/{test_post.id}", headers=auth_token)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Post deleted successfully"

        assert client.get(f"/api/v1/posts/{test_post.id}").status_code == 404
        db_session.refresh(test_post)
        assert test_post.is_active is False

    def test_non_author_cannot_delete(self, client, test_post, other_auth_token) -> None:
        response = client.delete(f"/api/v1/posts/{test_post.id}", headers=other_auth_token)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Not authorized to delete this post"
        assert client.get(f"/api/v1/posts/{test_post.id}").status_code == 200


class TestViews:
    """View counting skips the author and counts every other request."""

    def test_anonymous_view_counts(self, client, test_post) -> None:
        response = client.post(f"/api/v1/posts/{test_post.id}/view")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"views": 1}

    def test_author_view_is_not_counted(self, client, test_post, auth_token) -> None:
        response = client.post(f"/api/v1/posts/{test_post.id}/view", headers=auth_token)
        assert response.json() == {"views": 0}

    def test_repeated_views_all_count(self, client, test_post, other_auth_token) -> None:
        for _ in range(3):
            client.post(f"/api/v1/posts/{test_post.id}/view", headers=other_auth_token)
        assert client.get(f"/api/v1/posts/{test_post.id}").json()["views"] == 3

    def test_invalid_token_counts_as_anonymous(self, client, test_post) -> None:
        response = client.post(
            f"/api/v1/posts/{test_post.id}/view",
            headers={"Authorization": "Bearer garbage"},
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"views": 1}

    def test_reading_a_post_does_not_count(self, client, test_post) -> None:
        client.get(f"/api/v1/posts/{test_post.id}")
        assert client.get(f"/api/v1/posts/{test_post.id}").json()["views"] == 0

    def test_view_of_missing_post(self, client) -> None:
        response = client.post("/api/v1/posts/999/view")
        assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_user_posts(client, make_post, test_user, other_user) -> None:
    mine = make_post(test_user, title="Mine first")
    make_post(test_user, title="Hidden one", is_active=False)
    make_post(other_user, title="Not mine")

    response = client.get(f"/api/v1/posts/user/{test_user.id}")
    assert response.status_code == status.HTTP_200_OK
    assert [post["id"] for post in response.json()] == [mine.id]
