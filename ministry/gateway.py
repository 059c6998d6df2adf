"""
ministry/gateway.py

Where a finished wizard draft is sent.

Two backends share one small interface (`create(draft)` and
`update(minister_id, draft)`, both returning the saved record as a dict):

- LocalMinisterGateway  saves through ministry.services in-process
- HttpMinisterGateway   talks to a remote ministry API over HTTP

settings.MINISTRY_GATEWAY picks which one `get_gateway()` builds.
"""
from django.conf import settings
from django.utils.module_loading import import_string
import logging
import requests

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """A save was rejected or could not be delivered."""

    def __init__(self, message, status=None, details=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details or []


class LocalMinisterGateway:

    def create(self, draft):
        from . import services
        from .serializers import minister_to_dict

        try:
            minister = services.create_minister(draft)
        except services.ServiceError as exc:
            raise GatewayError(exc.message, status=exc.status, details=exc.details) from exc
        return minister_to_dict(minister)

    def update(self, minister_id, draft):
        from . import services
        from .models import Minister
        from .serializers import minister_to_dict

        minister = Minister.objects.filter(pk=minister_id).first()
        if minister is None:
            raise GatewayError("Minister not found", status=404)
        try:
            minister = services.update_minister(minister, draft)
        except services.ServiceError as exc:
            raise GatewayError(exc.message, status=exc.status, details=exc.details) from exc
        return minister_to_dict(minister)


class HttpMinisterGateway:
    """
    Client for the ministry REST API.

    Every response is expected in the `{success, data, error, message}`
    envelope; anything else is reported as a GatewayError.
    """

    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or settings.MINISTRY_API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.MINISTRY_API_TIMEOUT
        self.session = session or requests.Session()

    def create(self, draft):
        return self._send("POST", "/minister", draft)

    def update(self, minister_id, draft):
        return self._send("PUT", f"/minister/{minister_id}", draft)

    def _send(self, method, path, payload):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            raise GatewayError(f"Could not reach the ministry API: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not response.ok or not body.get("success"):
            message = (
                body.get("message")
                or body.get("error")
                or f"HTTP error! status: {response.status_code}"
            )
            logger.warning(f"{method} {url} rejected ({response.status_code}): {message}")
            raise GatewayError(message, status=response.status_code, details=body.get("details"))

        return body.get("data") or {}


def get_gateway():
    """Build the backend named by settings.MINISTRY_GATEWAY."""
    return import_string(settings.MINISTRY_GATEWAY)()
