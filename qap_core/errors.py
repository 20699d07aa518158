"""
Exception types raised by the QAP calculator
"""


class QAPError(Exception):
    """Base class for calculator errors"""


class UnknownJurisdictionError(QAPError):
    """Raised when a state has no QAP scoring table"""

    def __init__(self, jurisdiction: str):
        self.jurisdiction = jurisdiction
        super().__init__(
            f"No QAP scoring table for '{jurisdiction}'. Supported states: Texas, California."
        )


class UnknownLocationError(QAPError):
    """Raised when a city or ZIP code is not part of the reference data"""


class InvalidAmenityError(QAPError):
    """Raised for malformed amenity records"""


class ReportExportError(QAPError):
    """Raised when a PDF report cannot be written"""
