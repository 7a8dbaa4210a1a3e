"""
Common request/decode plumbing for upstream clients.
"""

from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from shared.logging import get_logger
from shared.errors import UpstreamError, UpstreamDecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonApiClient:
    """Single-shot JSON GET client. Requests are never retried."""

    service_name = "upstream"

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = get_logger(f"exporter.{self.service_name}")

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Fetch a JSON document, raising UpstreamError on transport or status failure."""
        url = f"{self.base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                service=self.service_name,
                message=str(exc) or exc.__class__.__name__,
                details={"url": url}
            ) from exc

        if response.status_code != 200:
            raise UpstreamError(
                service=self.service_name,
                message=self._error_message(response),
                details={"url": url, "status_code": response.status_code}
            )

        self.logger.debug("Upstream response received", url=url, params=params)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamDecodeError(
                service=self.service_name,
                message=f"Response is not JSON: {exc}",
                details={"url": url}
            ) from exc

    def _decode(self, model: Type[ModelT], payload: Any) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamDecodeError(
                service=self.service_name,
                message=f"Unexpected {model.__name__} shape: {exc.error_count()} error(s)",
                details={"errors": exc.errors(include_url=False)}
            ) from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Pull the gRPC status message out of an error body when there is one."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = body.get("message") or body.get("error")
            if isinstance(message, dict):
                message = message.get("message") or message.get("data")
            if message:
                return f"status {response.status_code}: {message}"

        return f"status {response.status_code}: {response.text}"
