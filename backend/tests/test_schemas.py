"""
DevConnector Backend — Schema & Repository Helper Tests
=========================================================

What we test:
    ✅ Required-text and email validators produce the user-facing messages
    ✅ Profile skills accept comma-separated strings and lists
    ✅ coerce_uuid maps malformed ids to None
    ✅ translate_errors turns SQLAlchemy failures into DatabaseError
"""

import uuid

import pydantic
import pytest
from sqlalchemy.exc import OperationalError

from devconnector.exceptions import DatabaseError
from devconnector.repositories.base import coerce_uuid, translate_errors
from devconnector.schemas.auth import RegisterRequest
from devconnector.schemas.post import PostCreate
from devconnector.schemas.profile import ProfileUpsert


class TestRequiredFields:

    @pytest.mark.parametrize("text", ["", "   ", None, 42])
    def test_post_text_required(self, text):
        """Empty or blank post text should be rejected."""
        with pytest.raises(pydantic.ValidationError) as exc_info:
            PostCreate(text=text)

        assert "Text is required" in str(exc_info.value)

    def test_post_text_kept_verbatim(self):
        """Valid post text should be stored exactly as sent."""
        assert PostCreate(text="  spaced  ").text == "  spaced  "

    def test_email_domain_is_normalized(self):
        """Email domain should be lower-cased."""
        data = RegisterRequest(name="Ada", email="ada@DevMail.COM", password="secret123")

        assert data.email == "ada@devmail.com"


class TestProfileSkills:

    @pytest.mark.parametrize(
        "skills, expected",
        [
            ("python, sql", ["python", "sql"]),
            ("python,,  ,sql ", ["python", "sql"]),
            (["go", " rust "], ["go", "rust"]),
        ],
    )
    def test_skills_normalized(self, skills, expected):
        """Comma-separated skills should become a trimmed list."""
        assert ProfileUpsert(status="Dev", skills=skills).skills == expected

    def test_social_links_only_filled_networks(self):
        """Social links should include only networks with a value."""
        data = ProfileUpsert(status="Dev", skills="go", youtube="https://youtube.com/ada", twitter="")

        assert data.social_links() == {"youtube": "https://youtube.com/ada"}


class TestRepositoryHelpers:

    def test_coerce_uuid(self):
        """coerce_uuid should accept UUIDs and UUID strings and reject anything else."""
        value = uuid.uuid4()

        assert coerce_uuid(value) is value
        assert coerce_uuid(str(value)) == value
        assert coerce_uuid("not-a-uuid") is None

    def test_translate_errors_wraps_sqlalchemy_errors(self):
        """SQLAlchemy errors should surface as DatabaseError with the operation name."""
        with pytest.raises(DatabaseError) as exc_info:
            with translate_errors("list posts"):
                raise OperationalError("SELECT 1", {}, Exception("connection lost"))

        assert exc_info.value.message == "Server error."
        assert exc_info.value.context["operation"] == "list posts"
