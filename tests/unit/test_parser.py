"""Unit tests for secrets list parsing."""

import pytest
from structlog.testing import capture_logs

from secretsync.secrets.errors import SecretsFormatError
from secretsync.secrets.parser import SecretEntry, load_entries, parse_secrets, validate_entries


def pairs(entries):
    return [(e.key, e.value) for e in entries]


@pytest.mark.unit
class TestParseSecrets:
    """Parsing of the comma-separated KEY=VALUE list."""

    def test_trims_and_drops_empty_segments(self):
        entries = parse_secrets("  KEY_ONE = val1  , ,, KEY_TWO=val2, ")

        assert pairs(entries) == [("KEY_ONE", "val1"), ("KEY_TWO", "val2")]

    def test_preserves_input_order(self):
        entries = parse_secrets("C=3,A=1,B=2")

        assert [e.key for e in entries] == ["C", "A", "B"]

    def test_missing_value_is_empty_string(self):
        entries = parse_secrets("ONLY_KEY, OTHER=")

        assert pairs(entries) == [("ONLY_KEY", ""), ("OTHER", "")]

    def test_splits_on_first_equals_only(self):
        entries = parse_secrets("TOKEN=abc==, URL=https://x.test/?a=b")

        assert pairs(entries) == [("TOKEN", "abc=="), ("URL", "https://x.test/?a=b")]

    def test_empty_input(self):
        assert parse_secrets("") == []
        assert parse_secrets(" , ,") == []

    def test_empty_key_is_kept_for_validation(self):
        entries = parse_secrets("A=1, =value")

        assert pairs(entries) == [("A", "1"), ("", "value")]

    def test_duplicate_key_last_value_wins(self):
        with capture_logs() as logs:
            entries = parse_secrets("A=1,B=2,A=3")

        assert pairs(entries) == [("A", "3"), ("B", "2")]
        assert any(
            log["event"] == "Duplicate secret key, last value wins" and log["key"] == "A"
            for log in logs
        )

    def test_entry_repr_hides_value(self):
        entry = SecretEntry(key="API_KEY", value="hunter2")

        assert "hunter2" not in repr(entry)
        assert "API_KEY" in repr(entry)


@pytest.mark.unit
class TestValidateEntries:
    """Empty keys fail the whole run before any remote call."""

    @pytest.mark.parametrize("raw", [" =value", "=value,A=1", "A=1, = x", "A=1,B=2,=3"])
    def test_empty_key_anywhere_fails(self, raw):
        with pytest.raises(SecretsFormatError, match="empty key"):
            load_entries(raw)

    def test_message_names_entry_position(self):
        entries = [SecretEntry(key="A", value="1"), SecretEntry(key="", value="2")]

        with pytest.raises(SecretsFormatError) as exc_info:
            validate_entries(entries)

        assert str(exc_info.value) == (
            "Invalid secrets format: Found an entry with an empty key (entry 2)."
        )

    def test_valid_entries_pass(self):
        entries = load_entries("A=1,B")

        assert pairs(entries) == [("A", "1"), ("B", "")]
