"""
HTTP transport for the Observation upload.

A single POST through a `requests.Session` that is closed on every path.
There is exactly one attempt; any failure is raised immediately.
"""

import logging

import click
import requests

from fhirtemp.config import UploadConfig
from fhirtemp.errors import TransportExecutionError, TransportInitError

logger = logging.getLogger(__name__)

FHIR_JSON_CONTENT_TYPE = "application/fhir+json;charset=utf-8"
FHIR_JSON_ACCEPT = "application/fhir+json"


def build_headers(body: bytes, config: UploadConfig) -> dict[str, str]:
    return {
        "Content-Type": FHIR_JSON_CONTENT_TYPE,
        "Accept": FHIR_JSON_ACCEPT,
        "Content-Length": str(len(body)),
        "User-Agent": config.user_agent,
    }


def post_observation(body: bytes, config: UploadConfig) -> int:
    """
    POST a rendered Observation to `config.endpoint_url` and return the HTTP status.

    Raises:
        TransportInitError: the request could not be prepared (malformed URL).
        TransportExecutionError: DNS, TLS, connection or timeout failure.
    """
    verify = config.ca_bundle if config.ca_bundle else True

    with requests.Session() as session:
        try:
            prepared = session.prepare_request(
                requests.Request(
                    "POST",
                    config.endpoint_url,
                    headers=build_headers(body, config),
                    data=body,
                )
            )
        except (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
        ) as e:
            raise TransportInitError(f"Failed to initialize request: {e}") from e

        click.echo(f"Posting Observation to {config.endpoint_url}")
        logger.info(f"POST {config.endpoint_url} ({len(body)} bytes, verify={verify!r})")

        try:
            response = session.send(prepared, verify=verify, timeout=config.timeout)
        except (requests.RequestException, OSError) as e:
            raise TransportExecutionError(f"Request failed: {e}") from e

        logger.debug(f"Response {response.status_code}: {response.text[:500]}")
        return response.status_code
