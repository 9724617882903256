import json

import pytest

from auth import FileTokenStore, MemoryTokenStore, token_from_login


def test_memory_store_roundtrip():
    store = MemoryTokenStore()
    assert store.get_token() is None
    store.save_token("abc")
    assert store.get_token() == "abc"
    store.clear_token()
    assert store.get_token() is None


def test_file_store_missing_file(tmp_path):
    assert FileTokenStore(tmp_path / "tokens.json").get_token() is None


def test_file_store_save_and_clear(tmp_path):
    path = tmp_path / "nested" / "tokens.json"
    store = FileTokenStore(path)
    store.save_token("abc")
    assert json.loads(path.read_text()) == {"access_token": "abc"}
    assert path.stat().st_mode & 0o777 == 0o600
    assert store.get_token() == "abc"
    store.clear_token()
    assert not path.exists()
    store.clear_token()


@pytest.mark.parametrize(
    "content",
    [
        b"{not json",
        b"[]",
        b'{"access_token": ""}',
        b'{"access_token": 5}',
        b'\xff\xfe{"access_token": "x"}',
    ],
)
def test_file_store_unusable_content(tmp_path, content):
    path = tmp_path / "tokens.json"
    path.write_bytes(content)
    assert FileTokenStore(path).get_token() is None


@pytest.mark.parametrize(
    "response,expected",
    [
        ({"access_token": "a"}, "a"),
        ({"token": "b"}, "b"),
        ({"access_token": "", "token": "c"}, "c"),
        ({"user": {}}, None),
        (["a"], None),
    ],
)
def test_token_from_login(response, expected):
    assert token_from_login(response) == expected
