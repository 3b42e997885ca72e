"""
DevConnector Backend — Profile Service Unit Tests
===================================================

What we test:
    ✅ First upsert creates a profile owned by the actor
    ✅ Second upsert overwrites fields in place
    ✅ Missing profiles are reported with the 400-style InvalidActionError
    ✅ Account deletion removes posts, profile and user
"""

import pytest

from devconnector.exceptions import InvalidActionError
from devconnector.schemas.profile import ProfileUpsert
from devconnector.services.profile_service import ProfileService


@pytest.fixture
def service(mock_profiles, mock_users, mock_posts):
    return ProfileService(mock_profiles, mock_users, mock_posts)


class TestUpsert:

    @pytest.mark.asyncio
    async def test_first_upsert_creates_profile(self, service, mock_profiles, mock_users, make_user):
        """First upsert should create a profile for the caller."""
        owner = make_user()
        mock_profiles.find_by_user_id.return_value = None
        mock_users.find_by_id.return_value = owner

        result = await service.upsert_profile(
            owner.id,
            ProfileUpsert(status="Developer", skills="python, sql", twitter="https://twitter.com/ada"),
        )

        mock_profiles.add.assert_awaited_once()
        assert result.user.id == owner.id
        assert result.user.name == owner.name
        assert result.skills == ["python", "sql"]
        assert result.social == {"twitter": "https://twitter.com/ada"}

    @pytest.mark.asyncio
    async def test_second_upsert_updates_in_place(self, service, mock_profiles, mock_users, make_user):
        """Second upsert should update the existing profile."""
        owner = make_user()
        mock_profiles.find_by_user_id.return_value = None
        mock_users.find_by_id.return_value = owner
        await service.upsert_profile(owner.id, ProfileUpsert(status="Junior", skills=["go"]))
        created = mock_profiles.add.await_args.args[0]

        mock_profiles.find_by_user_id.return_value = created
        result = await service.upsert_profile(
            owner.id, ProfileUpsert(status="Senior", skills=["go", "rust"], company="Acme")
        )

        assert mock_profiles.add.await_count == 1
        mock_profiles.save.assert_awaited_once()
        assert result.id == created.id
        assert result.status == "Senior"
        assert result.company == "Acme"


class TestLookup:

    @pytest.mark.asyncio
    async def test_own_profile_missing(self, service, mock_profiles, make_user):
        """Missing own profile should raise InvalidActionError with the no-profile message."""
        mock_profiles.find_by_user_id.return_value = None

        with pytest.raises(InvalidActionError) as exc_info:
            await service.get_own_profile(make_user().id)

        assert exc_info.value.message == "There is no profile for this user."

    @pytest.mark.asyncio
    async def test_profile_by_user_missing(self, service, mock_profiles):
        """Missing profile by user should raise InvalidActionError."""
        mock_profiles.find_by_user_id.return_value = None

        with pytest.raises(InvalidActionError) as exc_info:
            await service.get_profile_by_user("not-a-uuid")

        assert exc_info.value.message == "Profile not found."


class TestDeleteAccount:

    @pytest.mark.asyncio
    async def test_removes_posts_profile_and_user(
        self, service, mock_profiles, mock_users, mock_posts, make_user, make_post
    ):
        """Account deletion should remove every post, the profile and the user."""
        owner = make_user()
        posts = [make_post(owner), make_post(owner, text="another")]
        mock_posts.list_by_author.return_value = posts
        mock_users.find_by_id.return_value = owner

        result = await service.delete_account(owner.id)

        assert result.msg == "User deleted."
        assert mock_posts.delete.await_count == 2
        mock_profiles.delete_for_user.assert_awaited_once_with(owner.id)
        mock_users.delete.assert_awaited_once_with(owner)
