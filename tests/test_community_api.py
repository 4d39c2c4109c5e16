"""Tests for the community discussion endpoints."""

from datetime import datetime, timedelta

import pytest
from fastapi import status

from safepath_community.models import Discussion, DiscussionVote

DISCUSSIONS_URL = "/api/community/discussions"
VOTE_URL = "/api/community/vote"


def _create_payload(**overrides):
    payload = {
        "title": "Flood safety checklist",
        "content": "Keep documents in a dry bag.",
        "categoryId": "emergency",
        "tags": ["flood", "checklist"],
    }
    payload.update(overrides)
    return payload


class TestListDiscussions:
    """GET /community/discussions."""

    def test_empty_store_returns_empty_collection(self, client):
        response = client.get(DISCUSSIONS_URL)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"data": {"discussions": []}}

    def test_discussion_shape_uses_camel_case(self, client, test_discussion):
        response = client.get(DISCUSSIONS_URL)
        assert response.status_code == status.HTTP_200_OK

        (discussion,) = response.json()["data"]["discussions"]
        assert discussion["id"] == test_discussion.id
        assert discussion["category"]["id"] == "incidents"
        assert discussion["category"]["name"] == "Incident Reports"
        assert discussion["tags"] == ["flood"]
        assert discussion["replyCount"] == 0
        assert discussion["isPinned"] is False
        assert discussion["authorId"] == "user-1"
        assert {"createdAt", "updatedAt", "upvotes", "downvotes"} <= discussion.keys()

    def test_timestamps_carry_a_utc_offset(self, client, auth_headers):
        client.post(DISCUSSIONS_URL, json=_create_payload(), headers=auth_headers)

        (discussion,) = client.get(DISCUSSIONS_URL).json()["data"]["discussions"]
        for key in ("createdAt", "updatedAt"):
            parsed = datetime.fromisoformat(discussion[key])
            assert parsed.utcoffset() == timedelta(0)

    def test_listing_does_not_require_a_token(self, client, test_discussion):
        response = client.get(DISCUSSIONS_URL, headers={"Authorization": "Token xyz"})
        assert response.status_code == status.HTTP_200_OK


class TestCreateDiscussion:
    """POST /community/discussions."""

    def test_create_discussion(self, client, auth_headers, db_session):
        response = client.post(DISCUSSIONS_URL, json=_create_payload(), headers=auth_headers)
        assert response.status_code == status.HTTP_201_CREATED

        created = response.json()["data"]["discussion"]
        assert created["title"] == "Flood safety checklist"
        assert created["category"]["id"] == "emergency"
        assert created["tags"] == ["flood", "checklist"]
        assert created["upvotes"] == 0
        assert created["authorId"] == "user-1"
        assert created["createdAt"] == created["updatedAt"]

        stored = db_session.get(Discussion, created["id"])
        assert stored is not None
        assert stored.author_id == "user-1"

    def test_created_discussion_appears_in_listing(self, client, auth_headers):
        client.post(DISCUSSIONS_URL, json=_create_payload(), headers=auth_headers)
        discussions = client.get(DISCUSSIONS_URL).json()["data"]["discussions"]
        assert [d["title"] for d in discussions] == ["Flood safety checklist"]

    def test_tags_are_deduplicated_and_trimmed(self, client, auth_headers):
        response = client.post(
            DISCUSSIONS_URL,
            json=_create_payload(tags=[" flood ", "flood", "", "night"]),
            headers=auth_headers,
        )
        assert response.json()["data"]["discussion"]["tags"] == ["flood", "night"]

    def test_unknown_category_is_rejected(self, client, auth_headers):
        response = client.post(
            DISCUSSIONS_URL,
            json=_create_payload(categoryId="gossip"),
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_blank_title_is_rejected(self, client, auth_headers):
        response = client.post(
            DISCUSSIONS_URL,
            json=_create_payload(title="   "),
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_missing_token_is_rejected(self, client, db_session):
        response = client.post(DISCUSSIONS_URL, json=_create_payload())
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"detail": "No token"}
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert db_session.query(Discussion).count() == 0

    def test_wrong_scheme_is_rejected(self, client):
        response = client.post(
            DISCUSSIONS_URL,
            json=_create_payload(),
            headers={"Authorization": "Token xyz"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "No token"

    def test_expired_token_is_rejected(self, client, token_factory):
        from datetime import timedelta

        token = token_factory("user-1", expires_in=timedelta(seconds=-30))
        response = client.post(
            DISCUSSIONS_URL,
            json=_create_payload(),
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid or expired token"

    def test_handler_is_not_invoked_when_rejected(self, client, mocker):
        create = mocker.patch(
            "safepath_community.services.discussion_store.DiscussionStore.create_discussion"
        )
        response = client.post(
            DISCUSSIONS_URL,
            json=_create_payload(),
            headers={"Authorization": "Bearer not.a.token"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        create.assert_not_called()

    def test_gate_runs_before_body_validation(self, client):
        response = client.post(DISCUSSIONS_URL, json={"title": ""})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestCastVote:
    """POST /community/vote."""

    def _vote(self, client, headers, target_id, vote_type="upvote"):
        return client.post(
            VOTE_URL,
            json={"targetId": target_id, "targetType": "discussion", "voteType": vote_type},
            headers=headers,
        )

    def test_upvote(self, client, auth_headers, test_discussion):
        response = self._vote(client, auth_headers, test_discussion.id)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "success", "data": {"upvotes": 1, "downvotes": 0}}

    def test_downvote(self, client, auth_headers, test_discussion):
        response = self._vote(client, auth_headers, test_discussion.id, "downvote")
        assert response.json()["data"] == {"upvotes": 0, "downvotes": 1}

    def test_votes_from_different_users_accumulate(
        self, client, auth_headers, other_auth_headers, test_discussion
    ):
        self._vote(client, auth_headers, test_discussion.id)
        response = self._vote(client, other_auth_headers, test_discussion.id)
        assert response.json()["data"] == {"upvotes": 2, "downvotes": 0}

    def test_repeating_a_vote_withdraws_it(self, client, auth_headers, test_discussion, db_session):
        self._vote(client, auth_headers, test_discussion.id)
        response = self._vote(client, auth_headers, test_discussion.id)
        assert response.json()["data"] == {"upvotes": 0, "downvotes": 0}
        assert db_session.query(DiscussionVote).count() == 0

    def test_opposite_vote_switches_direction(self, client, auth_headers, test_discussion):
        self._vote(client, auth_headers, test_discussion.id, "upvote")
        response = self._vote(client, auth_headers, test_discussion.id, "downvote")
        assert response.json()["data"] == {"upvotes": 0, "downvotes": 1}

    def test_vote_is_visible_in_next_listing(self, client, auth_headers, test_discussion):
        self._vote(client, auth_headers, test_discussion.id)
        (discussion,) = client.get(DISCUSSIONS_URL).json()["data"]["discussions"]
        assert discussion["upvotes"] == 1

    def test_unknown_discussion(self, client, auth_headers):
        response = self._vote(client, auth_headers, "does-not-exist")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.parametrize("vote_type", ["up", "sideways", ""])
    def test_invalid_vote_type(self, client, auth_headers, test_discussion, vote_type):
        response = self._vote(client, auth_headers, test_discussion.id, vote_type)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_invalid_target_type(self, client, auth_headers, test_discussion):
        response = client.post(
            VOTE_URL,
            json={"targetId": test_discussion.id, "targetType": "reply", "voteType": "upvote"},
            headers=auth_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_rejected_vote_leaves_tallies_untouched(self, client, test_discussion, db_session):
        response = self._vote(client, {"Authorization": "Token xyz"}, test_discussion.id)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "No token"

        db_session.refresh(test_discussion)
        assert test_discussion.upvotes == 0


def test_list_categories(client):
    response = client.get("/api/community/categories")
    assert response.status_code == status.HTTP_200_OK
    categories = response.json()["data"]["categories"]
    assert [c["id"] for c in categories] == [
        "safety", "incidents", "routes", "emergency", "resources", "general",
    ]
