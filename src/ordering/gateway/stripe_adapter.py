"""Stripe Checkout adapter built on the stripe-python SDK."""

import json

import stripe

from ordering.gateway.port import (
    HostedSession,
    PaymentGateway,
    PaymentGatewayError,
    SessionLineItem,
    SessionStatus,
    WebhookSignatureError,
)


def _metadata(session) -> dict:
    metadata = getattr(session, "metadata", None)
    if not metadata:
        return {}
    if hasattr(metadata, "to_dict"):
        return dict(metadata.to_dict())
    return dict(metadata)


class StripeGateway(PaymentGateway):
    """Production gateway: hosted Stripe Checkout sessions."""

    def __init__(self, api_key: str, webhook_secret: str) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

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
        stripe_line_items = []
        for item in line_items:
            product_data = {"name": item.name}
            if item.image and item.image.startswith("http"):
                product_data["images"] = [item.image]
            stripe_line_items.append(
                {
                    "price_data": {
                        "currency": currency,
                        "product_data": product_data,
                        "unit_amount": item.unit_amount,
                    },
                    "quantity": item.quantity,
                }
            )

        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                idempotency_key=idempotency_key,
                mode="payment",
                payment_method_types=["card"],
                line_items=stripe_line_items,
                customer_email=customer_email,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
            )
        except stripe.StripeError as exc:
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc

        return HostedSession(id=session.id, url=session.url)

    def retrieve_session(self, session_id: str) -> SessionStatus:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        except stripe.StripeError as exc:
            raise PaymentGatewayError(exc.user_message or str(exc)) from exc

        metadata = _metadata(session)
        return SessionStatus(
            session_id=session.id,
            payment_status=session.payment_status,
            order_id=metadata.get("orderId"),
            customer_email=getattr(session, "customer_email", None),
            amount_total=getattr(session, "amount_total", None),
            metadata=metadata,
        )

    def parse_webhook(self, payload: bytes, signature: str) -> dict:
        body = payload.decode("utf-8") if isinstance(payload, bytes) else payload
        try:
            stripe.WebhookSignature.verify_header(body, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as exc:
            raise WebhookSignatureError(str(exc)) from exc
        try:
            return json.loads(body)
        except ValueError as exc:
            raise WebhookSignatureError("Webhook payload is not valid JSON") from exc
