"""
Upload configuration.

Defines the UploadConfig dataclass holding the fixed, read-only settings that
the document builder and the transport client receive explicitly.
"""

import math
import re
import typing
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version

from fhirtemp.errors import ValidationError

try:
    __version__ = version("fhirtemp")
except PackageNotFoundError:
    # running from a source checkout without an install
    __version__ = "0+unknown"

DEFAULT_ENDPOINT_URL = "https://hapi.fhir.org/baseR4/Observation"
DEFAULT_PATIENT_ID = "49410276"
DEFAULT_CA_BUNDLE = "curl-ca-bundle.crt"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"fhirtemp/{__version__}"

# FHIR R4 `id` datatype
_FHIR_ID_PATTERN = re.compile(r"^[A-Za-z0-9\-.]{1,64}$")
_URL_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)


@dataclass(frozen=True)
class UploadConfig:
    """
    Settings for a single upload run.

    Attributes:
        endpoint_url: Observation collection endpoint of the FHIR server.
        patient_id: Logical id of the Patient the reading belongs to.
        ca_bundle: Path to the TLS trust bundle, or None for the default store.
        timeout: Request timeout in seconds, or None to wait indefinitely.
        user_agent: Value sent in the User-Agent header.
    """

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    patient_id: str = DEFAULT_PATIENT_ID
    ca_bundle: typing.Optional[str] = DEFAULT_CA_BUNDLE
    timeout: typing.Optional[float] = DEFAULT_TIMEOUT
    user_agent: str = field(default=DEFAULT_USER_AGENT)

    def __post_init__(self):
        if not isinstance(self.endpoint_url, str) or not _URL_PATTERN.match(self.endpoint_url):
            raise ValidationError(f"Invalid endpoint URL: {self.endpoint_url!r}")

        if not isinstance(self.patient_id, str) or not _FHIR_ID_PATTERN.match(self.patient_id):
            raise ValidationError(f"Invalid patient ID: {self.patient_id!r}")

        if self.timeout is not None and not (math.isfinite(self.timeout) and self.timeout > 0):
            raise ValidationError(f"timeout must be a positive number of seconds, got {self.timeout!r}")

    @property
    def subject_reference(self) -> str:
        return f"Patient/{self.patient_id}"
