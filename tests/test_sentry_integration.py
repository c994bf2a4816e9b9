from __future__ import annotations

from storefront.core.sentry_integration import _before_send, init_sentry, scrub_payload


def test_scrub_payload_masks_card_fields() -> None:
    data = {
        "firstName": "Jane",
        "cardNumber": "4242 4242 4242 1234",
        "cvc": "123",
        "expiry_date": "12/27",
        "nested": [{"card_name": "Jane Doe"}],
    }

    scrubbed = scrub_payload(data)

    assert scrubbed["firstName"] == "Jane"
    assert scrubbed["cardNumber"] == "**** **** **** 1234"
    assert scrubbed["cvc"] == "[Filtered]"
    assert scrubbed["expiry_date"] == "[Filtered]"
    assert scrubbed["nested"] == [{"card_name": "[Filtered]"}]


def test_before_send_scrubs_request_body() -> None:
    event = {"request": {"url": "/api/v1/checkout", "data": {"cvc": "999"}}}

    assert _before_send(event, {})["request"]["data"] == {"cvc": "[Filtered]"}


def test_init_without_dsn(monkeypatch) -> None:
    monkeypatch.delenv("SENTRY_DSN", raising=False)

    assert init_sentry(environment="test") is False
