"""Tests for property transformers."""

from vaultbridge.secrets.transformers import compose, fan_out, rename


class TestFanOut:
    """Tests for fan_out."""

    def test_copies_value_to_every_target(self):
        """Should set every target key to the source value."""
        # Arrange
        transform = fan_out("token", "a.acl-token", "b.acl-token")

        # Act
        result = transform({"token": "abc123"})

        # Assert
        assert result == {"a.acl-token": "abc123", "b.acl-token": "abc123"}

    def test_source_key_not_forwarded(self):
        """Should drop the source key and any unrelated keys."""
        transform = fan_out("token", "a.acl-token")

        result = transform({"token": "abc", "lease_id": "xyz"})

        assert "token" not in result
        assert "lease_id" not in result

    def test_missing_source_yields_none(self):
        """Should map an absent source key to None."""
        transform = fan_out("token", "a.acl-token", "b.acl-token")

        assert transform({}) == {"a.acl-token": None, "b.acl-token": None}

    def test_preserves_target_order(self):
        """Targets should appear in declaration order."""
        transform = fan_out("token", "z", "a", "m")

        assert list(transform({"token": 1}).keys()) == ["z", "a", "m"]


class TestRename:
    """Tests for rename."""

    def test_renames_mapped_keys_only(self):
        """Should rename mapped keys and ignore the rest."""
        # Arrange
        transform = rename({"username": "db.user"})

        # Act
        result = transform({"username": "app", "password": "secret"})

        # Assert
        assert result == {"db.user": "app"}

    def test_forward_unmapped(self):
        """Should copy unmapped keys when asked to."""
        transform = rename({"username": "db.user"}, forward_unmapped=True)

        result = transform({"username": "app", "password": "secret"})

        assert result == {"db.user": "app", "password": "secret"}

    def test_mapping_copied_at_creation(self):
        """Later changes to the mapping should not affect the transformer."""
        mapping = {"a": "b"}
        transform = rename(mapping)
        mapping["a"] = "c"

        assert transform({"a": 1}) == {"b": 1}


class TestCompose:
    """Tests for compose."""

    def test_applies_left_to_right(self):
        """Output of one step feeds the next."""
        transform = compose(rename({"token": "t"}), fan_out("t", "x", "y"))

        assert transform({"token": "v"}) == {"x": "v", "y": "v"}

    def test_empty_compose_is_identity_copy(self):
        """No steps should return an equal, separate dict."""
        data = {"a": 1}
        result = compose()(data)

        assert result == data
        assert result is not data
