"""HTTP transport and failure classification shared by the API clients."""

import logging
from typing import Dict

import httpx
from pydantic import ValidationError

from owm_forecast.weather.errors import APIError, TransportError
from owm_forecast.weather.models import RemoteErrorPayload

logger = logging.getLogger(__name__)


def _redact(params: Dict[str, str]) -> Dict[str, str]:
    return {key: ("***" if key == "appid" else value) for key, value in params.items()}


def fetch_text(client: httpx.Client, url: str, params: Dict[str, str]) -> str:
    """Issue a single GET request and classify the outcome.

    Args:
        client: HTTP client carrying headers and timeout
        url: Endpoint URL
        params: Query parameters

    Returns:
        Raw response body of a successful request

    Raises:
        TransportError: On network failure, timeout, unreadable body or an
            error response whose body cannot be decoded
        APIError: If the service answered with a non-success status
    """
    logger.debug(f"Requesting {url} with params {_redact(params)}")

    try:
        response = client.get(url, params=params)
        body = response.text
    except httpx.TimeoutException as e:
        logger.error(f"Request to {url} timed out: {e}")
        raise TransportError(f"Request to {url} timed out", cause=e) from e
    except httpx.HTTPError as e:
        logger.error(f"Request error to {url}: {e}")
        raise TransportError(f"Request to {url} failed", cause=e) from e

    if response.is_success:
        return body

    try:
        payload = RemoteErrorPayload.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"Undecodable error response from {url}: {response.status_code} - {body}")
        raise TransportError(
            f"Service returned status {response.status_code} with an undecodable body",
            cause=e
        ) from e

    logger.error(f"HTTP error from {url}: {response.status_code} - {payload.message}")
    raise APIError(code=response.status_code, message=payload.message)
