"""AWS Lambda entry point.

Configure the function handler as ``auth0cleanup.handler.lambda_handler``.
"""

import json
import os
from collections.abc import Mapping
from typing import Any

import boto3

from .core.config import get_param_prefix, get_region, load_settings
from .core.parameter_store import ParameterStoreResolver
from .models.user import CleanupResponse
from .operations.cleanup_ops import CleanupService
from .utils.logging_utils import get_logger, init_default_logging

init_default_logging()
logger = get_logger(__name__)

# Built on first invocation and reused while the process stays warm
_service: CleanupService | None = None


def build_service(environ: Mapping[str, str] | None = None) -> CleanupService:
    """Create the cleanup service with settings seeded from the environment."""
    environ = os.environ if environ is None else environ
    region = get_region(environ)

    resolver = ParameterStoreResolver(
        boto3.client("ssm", region_name=region),
        load_settings(environ),
        prefix=get_param_prefix(environ),
    )
    return CleanupService(resolver, boto3.client("s3", region_name=region))


def get_service() -> CleanupService:
    global _service
    if _service is None:
        _service = build_service()
    return _service


def reset_service() -> None:
    """Drop the cached service so the next invocation resolves settings again."""
    global _service
    _service = None


def get_deleted_by(context: Any, environ: Mapping[str, str] | None = None) -> str:
    """Identify the actor: function name, then environment, then "local"."""
    environ = os.environ if environ is None else environ
    return (
        getattr(context, "function_name", None)
        or environ.get("AWS_LAMBDA_FUNCTION_NAME")
        or environ.get("DELETED_BY")
        or "local"
    )


def to_http_response(result: CleanupResponse) -> dict[str, Any]:
    return {
        "statusCode": result.status_code,
        "headers": {"content-type": "application/json"},
        "body": json.dumps(result.body),
    }


def lambda_handler(event: dict[str, Any] | None, context: Any) -> dict[str, Any]:
    try:
        service = get_service()
    except Exception as e:
        logger.error(f"Failed to initialize: {e}", exc_info=True)
        return to_http_response(CleanupResponse(500, {"error": str(e)}))

    result = service.run(event or {}, get_deleted_by(context))
    return to_http_response(result)
