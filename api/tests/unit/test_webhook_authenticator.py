"""
Tests de la firma X-TX-Signature-V2 y la ventana de tolerancia del header Date.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
from datetime import timedelta

import pytest

from app.domain.entities.sync import WebhookNotification
from app.infrastructure.security.webhook_authenticator import (
    WebhookAuthenticator,
    compute_signature,
)
from app.shared.exceptions.auth import UnauthorizedException
from app.shared.utils.datetime_utils import DateTimeUtils
from tests.db_helpers import FIXED_NOW, FrozenClock


SECRET = "s3cr3t"
URL = "https://example.com/api/v1/hooks/transifex"
BODY = b"project=shop&resource=shop-widget_translations&language=es"
DATE = DateTimeUtils.format_http_date(FIXED_NOW)


def _signed(
    *,
    body: bytes = BODY,
    url: str = URL,
    date_str: str = DATE,
    verb: str = "POST",
    secret: str = SECRET,
) -> WebhookNotification:
    signature = compute_signature(
        http_verb=verb, url=url, date_str=date_str, content=body, secret=secret
    )
    return WebhookNotification(
        http_verb="POST", url=URL, date_str=DATE, body=BODY, signature=signature
    )


@pytest.fixture
def authenticator() -> WebhookAuthenticator:
    return WebhookAuthenticator(clock=FrozenClock())


def test_compute_signature_matches_manual_hmac() -> None:
    content_md5 = hashlib.md5(BODY).hexdigest()
    message = "\n".join(["POST", URL, DATE, content_md5]).encode("utf-8")
    expected = base64.b64encode(hmac.new(SECRET.encode(), message, hashlib.sha256).digest()).decode()

    assert compute_signature(http_verb="POST", url=URL, date_str=DATE, content=BODY, secret=SECRET) == expected


def test_compute_signature_accepts_text_body() -> None:
    as_bytes = compute_signature(http_verb="POST", url=URL, date_str=DATE, content=BODY, secret=SECRET)
    as_text = compute_signature(
        http_verb="POST", url=URL, date_str=DATE, content=BODY.decode(), secret=SECRET
    )

    assert as_bytes == as_text


def test_valid_notification_is_accepted(authenticator: WebhookAuthenticator) -> None:
    authenticator.authenticate(_signed(), SECRET)

    assert authenticator.is_authentic(_signed(), SECRET) is True


@pytest.mark.parametrize(
    "tampered",
    [
        {"body": BODY + b"&percent=100"},
        {"verb": "PUT"},
        {"url": "https://evil.example.com/hook"},
        {"date_str": DateTimeUtils.format_http_date(FIXED_NOW - timedelta(seconds=1))},
        {"secret": "otro-secreto"},
    ],
    ids=["body", "verb", "url", "date", "secret"],
)
def test_any_mismatch_in_signed_fields_is_rejected(authenticator: WebhookAuthenticator, tampered) -> None:
    with pytest.raises(UnauthorizedException) as exc_info:
        authenticator.authenticate(_signed(**tampered), SECRET)

    assert exc_info.value.reason == "firma inválida"
    assert exc_info.value.message == "Unauthorized"
    assert exc_info.value.status_code == 401


def test_missing_signature_is_rejected(authenticator: WebhookAuthenticator) -> None:
    notification = WebhookNotification(http_verb="POST", url=URL, date_str=DATE, body=BODY, signature=None)

    with pytest.raises(UnauthorizedException, match="Unauthorized"):
        authenticator.authenticate(notification, SECRET)
    assert authenticator.is_authentic(notification, SECRET) is False


def test_missing_url_header_is_rejected(authenticator: WebhookAuthenticator) -> None:
    signed = _signed()
    notification = WebhookNotification(
        http_verb="POST", url=None, date_str=DATE, body=BODY, signature=signed.signature
    )

    with pytest.raises(UnauthorizedException):
        authenticator.authenticate(notification, SECRET)


def test_project_without_secret_is_rejected(authenticator: WebhookAuthenticator) -> None:
    with pytest.raises(UnauthorizedException) as exc_info:
        authenticator.authenticate(_signed(), "")

    assert "secret" in exc_info.value.reason


@pytest.mark.parametrize("date_str", [None, "", "ayer a la tarde"])
def test_unparseable_date_is_rejected(authenticator: WebhookAuthenticator, date_str) -> None:
    signature = compute_signature(
        http_verb="POST", url=URL, date_str=date_str or "", content=BODY, secret=SECRET
    )
    notification = WebhookNotification(
        http_verb="POST", url=URL, date_str=date_str, body=BODY, signature=signature
    )

    with pytest.raises(UnauthorizedException, match="Unauthorized"):
        authenticator.authenticate(notification, SECRET)


@pytest.mark.parametrize("skew", [timedelta(minutes=6), -timedelta(minutes=6)], ids=["late", "early"])
def test_date_outside_window_is_rejected(skew: timedelta) -> None:
    authenticator = WebhookAuthenticator(clock=FrozenClock(FIXED_NOW + skew))

    with pytest.raises(UnauthorizedException) as exc_info:
        authenticator.authenticate(_signed(), SECRET)

    assert "fuera de ventana" in exc_info.value.reason


def test_date_inside_window_is_accepted() -> None:
    authenticator = WebhookAuthenticator(clock=FrozenClock(FIXED_NOW + timedelta(seconds=299)))

    authenticator.authenticate(_signed(), SECRET)


def test_window_can_be_disabled() -> None:
    authenticator = WebhookAuthenticator(
        max_clock_skew_seconds=None,
        clock=FrozenClock(FIXED_NOW + timedelta(days=30)),
    )

    authenticator.authenticate(_signed(), SECRET)


def test_negative_window_is_invalid() -> None:
    with pytest.raises(ValueError):
        WebhookAuthenticator(max_clock_skew_seconds=-1)


def test_non_ascii_signature_is_rejected_not_crashing(authenticator: WebhookAuthenticator) -> None:
    notification = WebhookNotification(
        http_verb="POST", url=URL, date_str=DATE, body=BODY, signature="fírmá-ñ"
    )

    with pytest.raises(UnauthorizedException):
        authenticator.authenticate(notification, SECRET)
