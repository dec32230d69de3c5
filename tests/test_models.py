"""
Unit tests for the chatlog data model.
"""

import dataclasses

import pytest

from cohoard.models import Post, Timestamp, User


class TestUser:
    """Test the open user record."""

    def test_synthetic_user(self):
        user = User.synthetic("AARON")

        assert user["name"] == "AARON"
        assert user["key"] == "AARON"
        assert len(user) == 2

    def test_arbitrary_fields(self):
        user = User({"key": "C", "name": "Cassie", "avatar": "cassie.webp"})

        assert user.get("avatar") == "cassie.webp"
        assert user.get("color") is None
        assert set(user) == {"key", "name", "avatar"}

    def test_values_coerced_to_strings(self):
        user = User({"key": "A", "age": 7})

        assert user["age"] == "7"

    def test_immutable(self):
        user = User.synthetic("A")

        with pytest.raises(TypeError):
            user["name"] = "B"

    def test_source_mapping_not_shared(self):
        fields = {"key": "A", "name": "A"}
        user = User(fields)
        fields["name"] = "changed"

        assert user["name"] == "A"

    def test_equality_and_hash(self):
        a = User({"key": "A", "name": "A"})
        b = User.synthetic("A")

        assert a == b
        assert hash(a) == hash(b)
        assert a == {"key": "A", "name": "A"}

    def test_to_dict_is_plain_copy(self):
        user = User.synthetic("A")
        data = user.to_dict()
        data["name"] = "changed"

        assert type(data) is dict
        assert user["name"] == "A"


class TestBlocks:
    """Test block serialization."""

    def test_timestamp_to_dict(self):
        assert Timestamp(message="Today").to_dict() == {"type": "timestamp", "message": "Today"}

    def test_post_to_dict(self):
        post = Post(user=User.synthetic("A"), message="hi\n")

        assert post.to_dict() == {
            "type": "post",
            "user": {"name": "A", "key": "A"},
            "message": "hi\n",
        }

    def test_blocks_are_frozen(self):
        post = Post(user=User.synthetic("A"), message="hi\n")

        with pytest.raises(dataclasses.FrozenInstanceError):
            post.message = "bye\n"
