from typing import Any, Mapping, Protocol

from pydantic import ValidationError as SchemaValidationError

from ..schemas import ScanOutput


class VisionTool(Protocol):
    """Protocol for the image-labeling collaborator."""
    def scan(self, image_path: str) -> ScanOutput:
        ...


def parse_scan_output(payload: Any) -> ScanOutput:
    """
    Validate a raw vision payload.

    A malformed payload becomes an empty, well-formed scan rather than an error.
    """
    if not isinstance(payload, Mapping):
        return ScanOutput.empty("Scan returned no data")
    try:
        return ScanOutput.model_validate(payload)
    except SchemaValidationError:
        return ScanOutput.empty("Scan returned malformed data")
