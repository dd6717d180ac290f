"""
Tests for shared helpers
"""
import os

from ouranimelist.utils import get_or_create_secret_key, sanitize_sensitive_data


class TestSanitizeSensitiveData:
    def test_masks_credentials(self):
        data = {"name": "alice", "password": "hunter2", "nested": {"api_token": "abc"}}

        assert sanitize_sensitive_data(data) == {"name": "alice", "password": "***", "nested": {"api_token": "***"}}

    def test_summarizes_images(self):
        assert sanitize_sensitive_data({"image": "aW1n"}) == {"image": "<4 bytes>"}

    def test_lists_and_scalars(self):
        assert sanitize_sensitive_data([{"secret": 1}, 2]) == [{"secret": "***"}, 2]
        assert sanitize_sensitive_data("plain") == "plain"


class TestSecretKey:
    def test_key_is_persisted(self, tmp_path):
        config_dir = str(tmp_path / "config")

        key = get_or_create_secret_key(config_dir)

        assert len(key) == 64
        assert os.path.exists(os.path.join(config_dir, ".secret_key"))
        assert get_or_create_secret_key(config_dir) == key

    def test_invalid_key_is_replaced(self, tmp_path):
        (tmp_path / ".secret_key").write_text("short")

        key = get_or_create_secret_key(str(tmp_path))

        assert len(key) == 64
        assert (tmp_path / ".secret_key").read_text() == key
