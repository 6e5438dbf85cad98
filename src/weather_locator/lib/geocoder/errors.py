"""Geocoding error taxonomy.

Every error carries a machine-readable ``code``. ``str(error)`` renders as
``"<CODE>: <message>"`` so callers can switch on the prefix when building
user-facing messages.
"""

VALIDATION_ERROR = "VALIDATION_ERROR"
NO_RESULTS = "NO_RESULTS"
API_ERROR = "API_ERROR"
NETWORK_ERROR = "NETWORK_ERROR"


class GeocodeError(Exception):
    """Base class for all address resolution failures.

    Args:
        message: Human-readable, user-facing description.
    """

    code: str = API_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.code}: {message}")


class AddressValidationError(GeocodeError):
    """The provider answered but no candidate plausibly matches the address."""

    code = VALIDATION_ERROR


class NoResultsError(GeocodeError):
    """The provider returned no usable candidate at all."""

    code = NO_RESULTS

    def __init__(self, message: str = "No results found for this address.") -> None:
        super().__init__(message)


class GeocodingProviderError(GeocodeError):
    """Raised when the geocoding provider has a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, connection error)
    from a successful response that simply holds no candidates.

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
        network: True when the request never reached the provider.
    """

    def __init__(
        self,
        provider_name: str,
        message: str,
        status_code: int | None = None,
        *,
        network: bool = False,
    ) -> None:
        self.provider_name = provider_name
        self.status_code = status_code
        self.code = NETWORK_ERROR if network else API_ERROR
        super().__init__(message)
