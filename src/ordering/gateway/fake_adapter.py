"""Configurable fake hosted-checkout gateway for development and testing.

Simulates the gateway without any external calls. It can be configured at
runtime to fail session creation or verification, and sessions can be
completed by hand to drive the confirmation paths.
"""

import json
from uuid import uuid4

from ordering.gateway.port import (
    HostedSession,
    PaymentGateway,
    PaymentGatewayError,
    SessionLineItem,
    SessionStatus,
    WebhookSignatureError,
)

TEST_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.fail_verification: bool = False
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []
        self.sessions: dict[str, dict] = {}
        self._sessions_by_key: dict[str, str] = {}

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Gateway unavailable",
        fail_verification: bool = False,
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.fail_verification = fail_verification

    def create_session(
        self,
        line_items: list[SessionLineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
        customer_email: str,
        metadata: dict[str, str],
        idempotency_key: str,
    ) -> HostedSession:
        self.calls.append(
            {
                "method": "create_session",
                "line_items": list(line_items),
                "currency": currency,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "customer_email": customer_email,
                "metadata": dict(metadata),
                "idempotency_key": idempotency_key,
            }
        )
        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

        # Same idempotency key, same session
        if idempotency_key in self._sessions_by_key:
            session_id = self._sessions_by_key[idempotency_key]
        else:
            session_id = f"cs_test_{uuid4().hex[:16]}"
            self._sessions_by_key[idempotency_key] = session_id
            self.sessions[session_id] = {
                "payment_status": "unpaid",
                "customer_email": customer_email,
                "metadata": dict(metadata),
                "amount_total": sum(item.unit_amount * item.quantity for item in line_items),
            }
        return HostedSession(id=session_id, url=f"https://checkout.fake.test/pay/{session_id}")

    def complete_session(self, session_id: str) -> dict:
        """Mark a session paid and return the webhook event the gateway would send."""
        session = self.sessions[session_id]
        session["payment_status"] = "paid"
        return {
            "id": f"evt_test_{uuid4().hex[:16]}",
            "type": "checkout.session.completed",
            "data": {
                "object": {
                    "id": session_id,
                    "payment_status": "paid",
                    "customer_email": session["customer_email"],
                    "amount_total": session["amount_total"],
                    "metadata": session["metadata"],
                }
            },
        }

    def retrieve_session(self, session_id: str) -> SessionStatus:
        self.calls.append({"method": "retrieve_session", "session_id": session_id})
        if self.fail_verification:
            raise PaymentGatewayError(self.failure_reason)

        session = self.sessions.get(session_id)
        if session is None:
            raise PaymentGatewayError(f"No such checkout session: {session_id}")
        return SessionStatus(
            session_id=session_id,
            payment_status=session["payment_status"],
            order_id=session["metadata"].get("orderId"),
            customer_email=session["customer_email"],
            amount_total=session["amount_total"],
            metadata=dict(session["metadata"]),
        )

    def parse_webhook(self, payload: bytes, signature: str) -> dict:
        if signature != TEST_SIGNATURE:
            raise WebhookSignatureError("Invalid webhook signature")
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise WebhookSignatureError("Webhook payload is not valid JSON") from exc
