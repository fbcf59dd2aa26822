"""Tests for identities and namespace keys."""

from review_cache import Identity, SessionIdentity, StaticIdentity, namespace_key
from review_cache.identity import ANONYMOUS_NAMESPACE, current_namespace


def test_namespace_key_is_deterministic():
    assert namespace_key("http://a", "alice") == namespace_key("http://a", "alice")


def test_distinct_pairs_give_distinct_keys():
    keys = {
        namespace_key("http://a", "alice"),
        namespace_key("http://a", "bob"),
        namespace_key("http://b", "alice"),
        namespace_key("ab", "c"),
        namespace_key("a", "bc"),
        namespace_key("alice", "http://a"),
    }
    assert len(keys) == 6


def test_namespace_key_is_hex_digest():
    key = namespace_key("http://a", "alice")
    assert len(key) == 64
    int(key, 16)


def test_identity_namespace_ignores_api_key():
    a = Identity(server_url="http://a", api_key="one", user_name="alice")
    b = Identity(server_url="http://a", api_key="two", user_name="alice")
    assert a.namespace == b.namespace


def test_session_identity_lifecycle():
    session = SessionIdentity()
    assert session.current() is None

    session.set_config("http://a/", "key", "alice")
    assert session.current() == Identity("http://a", "key", "alice")

    session.clear()
    assert session.current() is None


def test_static_identity():
    identity = Identity("http://a", "key", "alice")
    assert StaticIdentity(identity).current() is identity


def test_current_namespace():
    assert current_namespace(StaticIdentity(None)) == ANONYMOUS_NAMESPACE
    identity = Identity("http://a", "key", "alice")
    assert current_namespace(StaticIdentity(identity)) == namespace_key("http://a", "alice")
