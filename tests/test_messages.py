"""Messages façade stories: message details and delivery attempts."""

from __future__ import annotations

import pytest

from postal_client.adapters.api.client import PostalClient
from postal_client.adapters.api.messages import (
    Delivery,
    GetDeliveriesRequest,
    GetMessageRequest,
)
from postal_client.adapters.memory import PostalServerStub
from postal_client.domain.errors import APIError, DecodeError

DELIVERY = {
    "id": 1,
    "status": "Sent",
    "details": "Message for jane@example.com accepted by mx.example.com",
    "output": "250 OK",
    "sent_with_ssl": True,
    "log_id": "abc",
    "time": 0.12,
    "timestamp": 1700000000,
}

MESSAGE = {
    "id": 42,
    "token": "Jk3mQ8pZ",
    "status": {"status": "Sent", "last_delivery_attempt": 1700000000.5, "held": False, "hold_expiry": None},
    "details": {
        "rcpt_to": "jane@example.com",
        "mail_from": "app@example.com",
        "subject": "Hi",
        "message_id": "abc@example.com",
        "timestamp": 1699999999.1,
        "direction": "outgoing",
        "size": "1.2 KB",
        "bounce": False,
        "bounce_for_id": 0,
        "tag": None,
        "received_with_ssl": None,
    },
    "plain_body": "Hello",
}


# ======================== get_deliveries ========================


@pytest.mark.os_agnostic
def test_deliveries_for_message_42_yield_one_attempt(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """The documented payload decodes to a one-element list with the same fields."""
    postal_stub.reply_success("api/v1/messages/deliveries", [DELIVERY])

    deliveries, meta = stub_client.messages.get_deliveries(GetDeliveriesRequest(id=42))

    assert deliveries == [
        Delivery(
            id=1,
            status="Sent",
            details="Message for jane@example.com accepted by mx.example.com",
            output="250 OK",
            sent_with_ssl=True,
            log_id="abc",
            time=0.12,
            timestamp=1700000000,
        )
    ]
    assert postal_stub.last_json() == {"id": 42}
    assert meta.status_code == 200


@pytest.mark.os_agnostic
def test_deliveries_keep_server_order(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """Attempts are returned in the order the server listed them."""
    postal_stub.reply_success(
        "api/v1/messages/deliveries",
        [{**DELIVERY, "id": 1, "status": "SoftFail"}, {**DELIVERY, "id": 2, "status": "Sent"}],
    )

    deliveries, _ = stub_client.messages.get_deliveries(GetDeliveriesRequest(id=7))

    assert [d.status for d in deliveries] == ["SoftFail", "Sent"]


@pytest.mark.os_agnostic
def test_deliveries_payload_of_wrong_shape_is_a_decode_error(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """A success envelope whose data is not a list of attempts raises DecodeError."""
    postal_stub.reply_success("api/v1/messages/deliveries", {"id": 1})

    with pytest.raises(DecodeError) as exc_info:
        stub_client.messages.get_deliveries(GetDeliveriesRequest(id=1))

    assert exc_info.value.response is not None


@pytest.mark.os_agnostic
def test_deliveries_read_null_ssl_flag_as_false(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """``"sent_with_ssl": null`` decodes as False instead of failing the call."""
    postal_stub.reply_success("api/v1/messages/deliveries", [{**DELIVERY, "sent_with_ssl": None}])

    deliveries, _ = stub_client.messages.get_deliveries(GetDeliveriesRequest(id=42))

    assert deliveries[0].sent_with_ssl is False
    assert deliveries[0].status == "Sent"


# ======================== get_message ========================


@pytest.mark.os_agnostic
def test_get_message_decodes_nested_sections(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """Status and details sub-records are populated; absent sections stay None."""
    postal_stub.reply_success("api/v1/messages/message", MESSAGE)

    message, _ = stub_client.messages.get_message(GetMessageRequest(id=42, expansions=["status", "details"]))

    assert message.id == 42
    assert message.status is not None and message.status.status == "Sent"
    assert message.details is not None and message.details.subject == "Hi"
    assert message.details.size == "1.2 KB"
    assert message.inspection is None
    assert message.plain_body == "Hello"


@pytest.mark.os_agnostic
def test_get_message_reads_null_flags_as_false(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """Null held, bounce, inspected, spam and threat flags decode as False."""
    payload = {
        **MESSAGE,
        "status": {**MESSAGE["status"], "held": None},
        "details": {**MESSAGE["details"], "bounce": None},
        "inspection": {"inspected": None, "spam": None, "spam_score": 0.0, "threat": None, "threat_details": None},
    }
    postal_stub.reply_success("api/v1/messages/message", payload)

    message, _ = stub_client.messages.get_message(GetMessageRequest(id=42, expansions=True))

    assert message.status is not None and message.status.held is False
    assert message.details is not None and message.details.bounce is False
    assert message.inspection is not None
    assert (message.inspection.inspected, message.inspection.spam, message.inspection.threat) == (False, False, False)


@pytest.mark.os_agnostic
def test_get_message_sends_expansions_under_underscore_key(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """Expansions travel as ``_expansions``; True asks for everything."""
    postal_stub.reply_success("api/v1/messages/message", MESSAGE)

    stub_client.messages.get_message(GetMessageRequest(id=42, expansions=True))

    assert postal_stub.last_json() == {"id": 42, "_expansions": True}


@pytest.mark.os_agnostic
def test_get_message_without_expansions_omits_the_key(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """Unset expansions are not sent."""
    postal_stub.reply_success("api/v1/messages/message", {"id": 42, "token": "t"})

    stub_client.messages.get_message(GetMessageRequest(id=42))

    assert postal_stub.last_json() == {"id": 42}


@pytest.mark.os_agnostic
def test_unknown_message_is_an_api_error(
    postal_stub: PostalServerStub,
    stub_client: PostalClient,
) -> None:
    """Postal answers unknown ids with a failure envelope."""
    postal_stub.reply_error(
        "api/v1/messages/message",
        {"code": "MessageNotFound", "message": "No message found matching provided ID", "id": 999},
        status="error",
    )

    with pytest.raises(APIError) as exc_info:
        stub_client.messages.get_message(GetMessageRequest(id=999))

    assert "No message found" in str(exc_info.value)


@pytest.mark.os_agnostic
def test_unregistered_route_reports_http_status(stub_client: PostalClient) -> None:
    """The stub's 404 error envelope surfaces as an APIError with status 404."""
    with pytest.raises(APIError) as exc_info:
        stub_client.messages.get_deliveries(GetDeliveriesRequest(id=1))

    assert exc_info.value.status_code == 404
