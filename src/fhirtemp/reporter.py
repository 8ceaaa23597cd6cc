"""Map the server's HTTP status onto the run outcome."""

import click

from fhirtemp.errors import ApplicationError

SUCCESS_MESSAGE = "Observation uploaded successfully."
FAILURE_MESSAGE = "Upload may have failed. Check server logs or response."


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def report_status(status_code: int) -> None:
    """
    Print the response code, then the success line for any 2xx status.

    Any other status raises ApplicationError.
    """
    click.echo(f"Server HTTP response code: {status_code}")
    if not is_success(status_code):
        raise ApplicationError(status_code, FAILURE_MESSAGE)
    click.echo(SUCCESS_MESSAGE)
