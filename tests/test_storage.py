import pytest

from catalog_client.contracts import Mode, ValidationError
from catalog_client.storage import ClientPreferences, InMemoryKeyValueStore, ModeStore, key_value_store_from_env
from catalog_client.storage.mode_store import DEMO_MODE_KEY
from catalog_client.storage.preferences import BASE_URL_KEY, DEVICE_ID_KEY
from catalog_client.storage.redis_store import RedisKeyValueStore


class BrokenStore(InMemoryKeyValueStore):
    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        raise OSError("disk unavailable")


class DummyRedis:
    def __init__(self):
        self.values = {}

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value

    def delete(self, key):
        self.values.pop(key, None)

    def ping(self):
        return True


def test_mode_store_round_trip_uses_string_flag():
    store = InMemoryKeyValueStore()
    modes = ModeStore(store)

    assert modes.get() == Mode.LIVE

    modes.set(Mode.DEMO)
    assert store.get(DEMO_MODE_KEY) == "true"
    assert modes.get() == Mode.DEMO

    modes.set(Mode.LIVE)
    assert store.get(DEMO_MODE_KEY) == "false"
    assert modes.get() == Mode.LIVE


def test_mode_store_swallows_storage_errors(caplog):
    modes = ModeStore(BrokenStore())

    modes.set(Mode.DEMO)

    assert modes.get() == Mode.LIVE
    assert "demo mode flag" in caplog.text


def test_preferences_base_url_defaults_and_persists():
    store = InMemoryKeyValueStore()
    prefs = ClientPreferences(store, "http://localhost:8080/")

    assert prefs.get_base_url() == "http://localhost:8080"

    prefs.set_base_url("  http://10.0.2.2:8080/ ")
    assert store.get(BASE_URL_KEY) == "http://10.0.2.2:8080"
    assert prefs.get_base_url() == "http://10.0.2.2:8080"


@pytest.mark.parametrize("url", ["http://localhost:99999", "not a url", "ftp://catalog.test", "   "])
def test_preferences_reject_unusable_base_url(url):
    store = InMemoryKeyValueStore()
    prefs = ClientPreferences(store, "http://localhost:8080")
    prefs.set_base_url("http://10.0.2.2:8080")

    with pytest.raises(ValidationError) as excinfo:
        prefs.set_base_url(url)

    assert "base_url" in excinfo.value.field_errors
    assert prefs.get_base_url() == "http://10.0.2.2:8080"


def test_device_id_is_generated_once_and_reused():
    store = InMemoryKeyValueStore()

    first = ClientPreferences(store, "http://x").get_device_id()
    second = ClientPreferences(store, "http://x").get_device_id()

    assert first.startswith("dev-")
    assert first == second
    assert store.get(DEVICE_ID_KEY) == first


def test_device_id_survives_broken_store():
    prefs = ClientPreferences(BrokenStore(), "http://x")

    device_id = prefs.get_device_id()

    assert device_id.startswith("dev-")
    assert prefs.get_device_id() == device_id
    assert prefs.get_base_url() == "http://x"


def test_redis_store_namespaces_keys():
    client = DummyRedis()
    store = RedisKeyValueStore(url="redis://unused", namespace="tests", client=client)

    store.set(DEMO_MODE_KEY, "true")

    assert client.values == {"tests:demo_mode_active": "true"}
    assert store.get(DEMO_MODE_KEY) == "true"
    assert store.ping() is True
    store.delete(DEMO_MODE_KEY)
    assert store.get(DEMO_MODE_KEY) is None


def test_key_value_store_from_env_defaults_to_memory(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)

    assert isinstance(key_value_store_from_env(), InMemoryKeyValueStore)
