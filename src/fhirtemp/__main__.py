"""
Command-line interface for fhirtemp.

Reads one body temperature, renders it as a FHIR Observation and posts it to
the configured server:

    fhirtemp 37.2
    fhirtemp            # prompts for the value
"""

import logging
import sys
import typing

import click

from fhirtemp.config import (
    DEFAULT_CA_BUNDLE,
    DEFAULT_ENDPOINT_URL,
    DEFAULT_PATIENT_ID,
    DEFAULT_TIMEOUT,
    UploadConfig,
)
from fhirtemp.errors import UploadError
from fhirtemp.observation import TemperatureObservation
from fhirtemp.reading import resolve_temperature
from fhirtemp.reporter import report_status
from fhirtemp.transport import post_observation

logger = logging.getLogger(__name__)
logging.getLogger("fhirtemp").addHandler(logging.NullHandler())


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("temperature", required=False)
@click.option(
    "--endpoint-url",
    default=DEFAULT_ENDPOINT_URL,
    show_default=True,
    envvar="FHIRTEMP_ENDPOINT_URL",
    help="FHIR Observation endpoint to POST to",
)
@click.option(
    "--patient-id",
    default=DEFAULT_PATIENT_ID,
    show_default=True,
    envvar="FHIRTEMP_PATIENT_ID",
    help="logical id of the subject Patient",
)
@click.option(
    "--ca-bundle",
    default=DEFAULT_CA_BUNDLE,
    show_default=True,
    envvar="FHIRTEMP_CA_BUNDLE",
    type=click.Path(dir_okay=False),
    help="certificate bundle used to verify the server",
)
@click.option(
    "--system-ca",
    is_flag=True,
    help="verify the server against the default trust store instead of --ca-bundle",
)
@click.option(
    "--timeout",
    default=DEFAULT_TIMEOUT,
    show_default=True,
    envvar="FHIRTEMP_TIMEOUT",
    type=click.FloatRange(min=0),
    help="request timeout in seconds (0 waits indefinitely)",
)
@click.option(
    "--strict/--permissive",
    default=False,
    help="reject non-numeric input instead of reading its numeric prefix (default: permissive)",
)
@click.option("--verbose-logging", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def main(
    temperature: typing.Optional[str],
    endpoint_url: str,
    patient_id: str,
    ca_bundle: str,
    system_ca: bool,
    timeout: float,
    strict: bool,
    verbose_logging: bool,
    log_file_path: typing.Optional[str],
):
    """
    Upload a body TEMPERATURE (degrees Celsius) as a FHIR R4 Observation.

    Exits 0 when the server answers 2xx and 1 on any failure.
    """
    _configure_logging(verbose_logging, log_file_path)

    try:
        config = UploadConfig(
            endpoint_url=endpoint_url,
            patient_id=patient_id,
            ca_bundle=None if system_ca else ca_bundle,
            timeout=timeout or None,
        )
        value = resolve_temperature(temperature, strict=strict)
        observation = TemperatureObservation.build(value, config)
        body = observation.render()
        status_code = post_observation(body, config)
        report_status(status_code)
    except UploadError as e:
        logger.error(f"{type(e).__name__}: {e}")
        click.echo(str(e), err=True)
        sys.exit(e.exit_code)


def _configure_logging(verbose_logging: bool, log_file_path: typing.Optional[str]) -> None:
    # stay silent unless asked; user-facing lines go through click.echo
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose_logging:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose_logging else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=True,
        )


if __name__ == "__main__":
    main()
