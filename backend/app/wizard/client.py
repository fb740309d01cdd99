"""HTTP client for the wizard's backend endpoints.

Thin wrapper over httpx.AsyncClient for the four calls a wizard makes:
hydrate (GET), save step (POST), final submit (POST .../submit) and file
upload (multipart POST /upload). Responses use the API's {"data": ...}
envelope; errors use {"error": {"code", "message", "details"}}.

Every failure surfaces as WizardClientError so callers deal with a single
exception type: the navigator soft-fails on it, the finalizer turns it
into a failed SubmissionResult.
"""

from typing import Any

import httpx
import structlog

from app.core.config import settings
from app.wizard.steps import Draft, WizardDefinition

logger = structlog.get_logger()

UPLOAD_PATH = "/upload"


class WizardClientError(Exception):
    """Backend call failed.

    Attributes:
        message: Human-readable reason.
        status_code: HTTP status, or None for network failures.
        field_errors: Field key -> message parsed from the error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        field_errors: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.field_errors = field_errors or {}
        super().__init__(message)


def _field_errors(details: Any) -> dict[str, str]:
    """Map API error details back onto form field keys."""
    errors: dict[str, str] = {}
    if not isinstance(details, list):
        return errors
    for item in details:
        if not isinstance(item, dict):
            continue
        field = item.get("field")
        message = item.get("message") or item.get("error")
        if isinstance(field, str) and isinstance(message, str):
            errors.setdefault(field, message)
    return errors


def _raise_for_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    message = f"Request failed with status {response.status_code}"
    details: Any = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message") or message
        details = body["error"].get("details")
    raise WizardClientError(
        message,
        status_code=response.status_code,
        field_errors=_field_errors(details),
    )


class WizardApiClient:
    """Backend client bound to one wizard definition.

    Args:
        definition: Flow whose endpoints this client calls.
        base_url: API root, e.g. "http://localhost:8000/api/v1".
        http_client: Preconfigured client (tests pass one with a
            MockTransport); when given, base_url and timeout are ignored
            and the caller owns its lifetime.
        timeout: Per-request timeout in seconds.
        cookies: Cookies sent with every request (session token).
    """

    def __init__(
        self,
        definition: WizardDefinition,
        *,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        cookies: dict[str, str] | None = None,
    ) -> None:
        self.definition = definition
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url or settings.wizard_api_base_url,
            timeout=timeout or settings.wizard_request_timeout_seconds,
            cookies=cookies,
        )

    async def __aenter__(self) -> "WizardApiClient":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(
                "Wizard request failed",
                flow=self.definition.flow,
                method=method,
                path=path,
                error=str(exc),
            )
            raise WizardClientError(f"Network error: {exc}") from exc
        _raise_for_error(response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise WizardClientError(
                "Invalid JSON response", status_code=response.status_code
            ) from exc

    async def load_draft(self) -> dict[str, Any] | None:
        """Fetch the saved draft.

        Returns:
            {"current_step", "status", "draft"} or None when the backend has
            nothing saved for this user.
        """
        try:
            body = await self._request("GET", self.definition.api_path)
        except WizardClientError as exc:
            if exc.status_code == 404:
                return None
            raise
        data = body.get("data") if isinstance(body, dict) else None
        return data if isinstance(data, dict) else None

    async def save_step(self, step: int, data: Draft) -> None:
        """Persist the draft as of a step."""
        await self._request(
            "POST",
            self.definition.api_path,
            json={"step": step, "data": data},
        )

    async def submit(self, draft: Draft) -> dict[str, Any]:
        """Send the complete draft for final validation and persistence.

        Returns:
            The "data" object of the response (entity_id, redirect_url...).
        """
        body = await self._request("POST", self.definition.submit_path, json=draft)
        data = body.get("data") if isinstance(body, dict) else None
        return data if isinstance(data, dict) else {}

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        category: str | None = None,
    ) -> str:
        """Upload a file (CV, photo, logo) and return its public URL."""
        form = {"category": category} if category else None
        body = await self._request(
            "POST",
            UPLOAD_PATH,
            files={"file": (filename, content, content_type)},
            data=form,
        )
        url = body.get("url") if isinstance(body, dict) else None
        if not isinstance(url, str) or not url:
            raise WizardClientError("Upload response has no url")
        return url
