from __future__ import annotations

from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from app.core.config import settings
from app.core.logging import request_id_ctx


def before_send(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    """Tag events with the request id and strip request payloads."""
    request_id = request_id_ctx.get()
    if request_id:
        event.setdefault("tags", {})["request_id"] = request_id

    request = event.get("request")
    if isinstance(request, dict):
        # Request payloads never leave the service
        request.pop("data", None)
        request.pop("cookies", None)

    return event


def init_sentry() -> bool:
    """Initialize Sentry error tracking when a DSN is configured."""
    if not settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.sentry_environment or settings.environment,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            LoggingIntegration(
                level=None,
                event_level=None,
            ),
        ],
        traces_sample_rate=0.1,
        before_send=before_send,
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )

    sentry_sdk.set_tag("service", settings.app_name)
    sentry_sdk.set_tag("environment", settings.environment)
    return True
