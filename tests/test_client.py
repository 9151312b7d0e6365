import pytest
import requests

import pushover_cli
from pushover_cli.client import ApiConfig, Client, parse_status
from pushover_cli.errors import (
    BlankRequiredFieldError,
    ConfigError,
    DeliveryRejectedError,
    InvalidTokenError,
    NotInitializedError,
    TransportError,
    TransportInitError,
)
from pushover_cli.message import Message
from pushover_cli.utils import DEFAULT_API_URL

from conftest import TOKEN, USER


@pytest.mark.parametrize("token", ["", "a" * 29, "a" * 31, "a" * 29 + "\x00", "é" * 30, "a" * 29 + "\n"])
def test_initialize_rejects_bad_tokens(token):
    with pytest.raises(InvalidTokenError):
        pushover_cli.initialize(token)


@pytest.mark.parametrize("token", ["a" * 30, " " * 30, "~" * 30, "azGT9r0oqy3jhN8aF2gc5vd1k7LmXp"])
def test_initialize_accepts_printable_tokens(token):
    client = pushover_cli.initialize(token)
    assert client.config.token == token
    assert client.config.url == DEFAULT_API_URL


def test_initialize_rejects_bad_endpoint():
    with pytest.raises(TransportInitError):
        pushover_cli.initialize(TOKEN, url="ftp://example.com/messages")


def test_send_before_initialize_skips_validation(fake_post):
    with pytest.raises(NotInitializedError):
        pushover_cli.send(Message(user="", message="hi"))
    assert fake_post.calls == []


def test_blank_user_fails_before_network(fake_post):
    pushover_cli.initialize(TOKEN)
    with pytest.raises(BlankRequiredFieldError):
        pushover_cli.send(Message(user="", message="hi"))
    assert fake_post.calls == []


def test_send_posts_form_in_order(fake_post):
    pushover_cli.initialize(TOKEN, timeout=5)
    result = pushover_cli.send(Message(user=USER, message="hello", priority=2, retry=10, expire=999999))

    assert result.ok
    assert result.request_id == "req-1"
    call = fake_post.calls[0]
    assert call["url"] == DEFAULT_API_URL
    assert call["timeout"] == 5
    assert fake_post.last_fields == [
        ("token", TOKEN), ("user", USER), ("message", "hello"),
        ("priority", "2"), ("retry", "30"), ("expire", "86400"),
    ]


def test_status_zero_is_rejection(fake_post):
    fake_post.reply({"status": 0, "errors": ["user identifier is invalid"], "request": "req-9"}, status_code=400)
    client = pushover_cli.initialize(TOKEN)
    with pytest.raises(DeliveryRejectedError) as info:
        client.send(Message(user=USER, message="hello"))
    assert info.value.status == 0
    assert info.value.errors == ["user identifier is invalid"]
    assert info.value.request_id == "req-9"
    assert info.value.http_status == 400


@pytest.mark.parametrize("body", ["not json", "[1]", '{"status": "1"}', "{}", ""])
def test_unreadable_status_is_rejection(fake_post, body):
    fake_post.reply(body)
    client = pushover_cli.initialize(TOKEN)
    with pytest.raises(DeliveryRejectedError) as info:
        client.send(Message(user=USER, message="hello"))
    assert info.value.status is None


def test_connection_failure_is_transport_error(fake_post):
    fake_post.exc = requests.exceptions.ConnectionError("refused")
    client = pushover_cli.initialize(TOKEN)
    with pytest.raises(TransportError):
        client.send(Message(user=USER, message="hello"))


def test_timeout_is_transport_error(fake_post):
    fake_post.exc = requests.exceptions.Timeout("slow")
    client = pushover_cli.initialize(TOKEN)
    with pytest.raises(TransportError):
        client.send(Message(user=USER, message="hello"))


def test_invalid_url_is_transport_init_error(fake_post):
    fake_post.exc = requests.exceptions.InvalidURL("bad host")
    client = pushover_cli.initialize(TOKEN)
    with pytest.raises(TransportInitError):
        client.send(Message(user=USER, message="hello"))


def test_reinitialize_replaces_default(fake_post):
    pushover_cli.initialize(TOKEN)
    other = "b" * 30
    pushover_cli.initialize(other, url="https://push.example.com/1/messages.json")
    pushover_cli.send(Message(user=USER, message="hello"))
    assert fake_post.calls[0]["url"] == "https://push.example.com/1/messages.json"
    assert fake_post.last_fields[0] == ("token", other)


def test_independent_clients_do_not_touch_default(fake_post):
    client = Client(ApiConfig.create(TOKEN))
    client.send(Message(user=USER, message="hello"))
    with pytest.raises(NotInitializedError):
        pushover_cli.get_client()


def test_repr_masks_token():
    client = Client(ApiConfig.create(TOKEN))
    assert TOKEN not in repr(client)


def test_parse_status():
    assert parse_status('{"status":1,"request":"x"}') == (1, {"status": 1, "request": "x"})
    assert parse_status('{"status":true}')[0] is None
    assert parse_status("garbage") == (None, {})


@pytest.mark.parametrize("timeout", [0, -1, -0.5, "10", True])
def test_initialize_rejects_bad_timeout(timeout):
    with pytest.raises(ConfigError):
        pushover_cli.initialize(TOKEN, timeout=timeout)


def test_rejection_with_structured_errors(fake_post):
    fake_post.reply({"status": 0, "errors": [{"code": 1}, "user is invalid"]}, status_code=400)
    client = pushover_cli.initialize(TOKEN)
    with pytest.raises(DeliveryRejectedError) as info:
        client.send(Message(user=USER, message="hello"))
    assert info.value.errors == ["{'code': 1}", "user is invalid"]
    assert "user is invalid" in str(info.value)
