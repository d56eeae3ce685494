import json
import logging

from wallet_client.db.storage import InMemoryStorage, JsonFileStorage
from wallet_client.services.session import TOKEN_KEY, USER_KEY, WALLET_KEY, SessionStore


class BrokenStorage(InMemoryStorage):
    def set_item(self, key, value):
        raise OSError("disk full")


def test_user_round_trips_through_storage(storage, user):
    SessionStore.load(storage).set_user(user)

    restored = SessionStore.load(storage)

    assert restored.get_user() == user


def test_wallet_round_trips_through_storage(storage, wallet):
    SessionStore.load(storage).set_wallet(wallet)

    assert SessionStore.load(storage).get_wallet() == wallet


def test_round_trip_through_json_file(tmp_path, user, wallet):
    path = tmp_path / "session.json"
    session = SessionStore.load(JsonFileStorage(path))
    session.set_user(user)
    session.set_wallet(wallet)
    session.set_token("token-value")

    restored = SessionStore.load(JsonFileStorage(path))

    assert restored.get_user() == user
    assert restored.get_wallet() == wallet
    assert restored.get_token() == "token-value"
    assert set(json.loads(path.read_text())) == {USER_KEY, WALLET_KEY, TOKEN_KEY}


def test_set_replaces_previous_value(storage, user):
    session = SessionStore.load(storage)
    session.set_user(user)
    renamed = user.model_copy(update={"fullname": "Jane Smith"})

    session.set_user(renamed)

    assert session.get_user().fullname == "Jane Smith"
    assert SessionStore.load(storage).get_user().fullname == "Jane Smith"


def test_empty_storage_hydrates_to_nothing(storage):
    session = SessionStore.load(storage)
    assert session.get_user() is None
    assert session.get_wallet() is None
    assert session.get_token() is None


def test_unparsable_stored_data_is_treated_as_absent(caplog, wallet):
    storage = InMemoryStorage({USER_KEY: "{not json", WALLET_KEY: wallet.model_dump_json(by_alias=True)})

    session = SessionStore.load(storage)

    assert session.get_user() is None
    assert session.get_wallet() == wallet
    assert any("Discarding unreadable userData" in record.message for record in caplog.records)


def test_storage_write_failure_is_logged_not_raised(caplog, user):
    session = SessionStore.load(BrokenStorage())

    with caplog.at_level(logging.ERROR):
        session.set_user(user)

    assert session.get_user() == user
    assert any("Failed to persist userData" in record.message for record in caplog.records)


def test_clear_removes_everything(storage, user, wallet):
    session = SessionStore.load(storage)
    session.set_user(user)
    session.set_wallet(wallet)
    session.set_token("abc")

    session.clear()

    assert session.get_user() is None
    assert session.get_token() is None
    assert SessionStore.load(storage).get_wallet() is None


def test_json_file_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("[1, 2")
    storage = JsonFileStorage(path)

    assert storage.get_item(USER_KEY) is None
    storage.set_item(TOKEN_KEY, "abc")
    assert storage.get_item(TOKEN_KEY) == "abc"


def test_json_file_storage_remove_item(tmp_path):
    storage = JsonFileStorage(tmp_path / "nested" / "session.json")
    storage.set_item(TOKEN_KEY, "abc")

    storage.remove_item(TOKEN_KEY)
    storage.remove_item("missing")

    assert storage.get_item(TOKEN_KEY) is None
