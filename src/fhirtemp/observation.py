"""
Body-temperature Observation document.

Defines the TemperatureObservation dataclass and renders it as a FHIR R4
Observation resource (vital-signs category, LOINC 8310-5, UCUM `Cel`).

The document is produced from a fixed text template rather than `json.dumps`
so the value keeps exactly two decimals on the wire (36 is sent as 36.00).
"""

import logging
import typing
from dataclasses import dataclass
from datetime import datetime, timezone

from fhirtemp.config import UploadConfig
from fhirtemp.errors import FormattingError

logger = logging.getLogger(__name__)

# Upper bound on the encoded document, in bytes
MAX_DOCUMENT_BYTES = 2047

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

CATEGORY_SYSTEM = "http://terminology.hl7.org/CodeSystem/observation-category"
CATEGORY_CODE = "vital-signs"
CATEGORY_DISPLAY = "Vital Signs"

LOINC_SYSTEM = "http://loinc.org"
LOINC_BODY_TEMPERATURE = "8310-5"
LOINC_DISPLAY = "Body temperature"

UCUM_SYSTEM = "http://unitsofmeasure.org"
UCUM_CELSIUS = "Cel"
UNIT_DISPLAY = "degrees C"

_TEMPLATE = (
    "{{\n"
    '  "resourceType": "Observation",\n'
    '  "status": "{status}",\n'
    '  "category": [ {{ "coding": [ {{ "system": "{category_system}", "code": "{category_code}", "display": "{category_display}" }} ] }} ],\n'
    '  "code": {{ "coding": [ {{ "system": "{loinc_system}", "code": "{loinc_code}", "display": "{loinc_display}" }} ], "text": "{loinc_display}" }},\n'
    '  "subject": {{ "reference": "{subject_reference}" }},\n'
    '  "effectiveDateTime": "{effective}",\n'
    '  "valueQuantity": {{ "value": {value:.2f}, "unit": "{unit}", "system": "{ucum_system}", "code": "{ucum_code}" }}\n'
    "}}\n"
)


@dataclass(frozen=True)
class TemperatureObservation:
    """
    One body-temperature measurement for one patient.

    Attributes:
        patient_id: Logical id of the subject Patient.
        value: Temperature in degrees Celsius.
        effective_timestamp: UTC instant of the reading, second precision.
        status: Observation status, always "final".
    """

    patient_id: str
    value: float
    effective_timestamp: datetime
    status: str = "final"

    @classmethod
    def build(
        cls,
        value: float,
        config: UploadConfig,
        now: typing.Optional[datetime] = None,
    ) -> "TemperatureObservation":
        """Create the observation stamped with `now` (current UTC time by default)."""
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return cls(
            patient_id=config.patient_id,
            value=value,
            effective_timestamp=now.replace(microsecond=0),
        )

    @property
    def effective_date_time(self) -> str:
        return self.effective_timestamp.strftime(TIMESTAMP_FORMAT)

    def render(self, max_bytes: int = MAX_DOCUMENT_BYTES) -> bytes:
        """
        Render the Observation as UTF-8 JSON.

        Raises FormattingError if the encoded document is longer than `max_bytes`.
        """
        text = _TEMPLATE.format(
            status=self.status,
            category_system=CATEGORY_SYSTEM,
            category_code=CATEGORY_CODE,
            category_display=CATEGORY_DISPLAY,
            loinc_system=LOINC_SYSTEM,
            loinc_code=LOINC_BODY_TEMPERATURE,
            loinc_display=LOINC_DISPLAY,
            subject_reference=f"Patient/{self.patient_id}",
            effective=self.effective_date_time,
            value=self.value,
            unit=UNIT_DISPLAY,
            ucum_system=UCUM_SYSTEM,
            ucum_code=UCUM_CELSIUS,
        )
        body = text.encode("utf-8")
        if len(body) > max_bytes:
            raise FormattingError(
                f"JSON payload too long ({len(body)} bytes, limit {max_bytes})."
            )
        logger.debug(f"Rendered Observation ({len(body)} bytes)")
        return body
