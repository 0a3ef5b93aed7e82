"""Exceptions raised by coinvend domain objects."""


class CoinVendError(RuntimeError):
    """Base class for domain exceptions."""


class CoinStoreError(CoinVendError, ValueError):
    """Raised when a coin store is asked to do something impossible."""


class UnrecognizedDenomination(CoinStoreError):
    """Raised when a coin value does not match any catalog entry."""

    def __init__(self, value: int) -> None:
        super().__init__(f"Unrecognised coin ({value})")
        self.value = value


class InsufficientBalance(CoinStoreError):
    """Raised when change is requested beyond the store's total value."""


class NegativeAmount(CoinStoreError):
    """Raised for negative change requests or coin counts."""


class ConfigurationError(CoinVendError, ValueError):
    """Raised when a machine cannot be built from its stock definitions."""


class InvalidLocation(ConfigurationError):
    """Raised for a slot location outside the supported alphabet."""

    def __init__(self, location: object) -> None:
        super().__init__(f"Invalid item location ({location!r})")
        self.location = location


class InvalidPrice(ConfigurationError):
    """Raised when a price cannot be paid in catalog coins."""

    def __init__(self, location: str, price: int) -> None:
        super().__init__(f"Item at location {location} has an invalid price of {price}p")
        self.location = location
        self.price = price


class InvalidQuantity(ConfigurationError):
    """Raised when a slot is loaded with a negative quantity."""


class DuplicateLocation(ConfigurationError):
    """Raised when two stock definitions target the same location."""

    def __init__(self, location: str) -> None:
        super().__init__(f"Multiple items configured at location {location}")
        self.location = location


class EmptyMachine(ConfigurationError):
    """Raised when the loaded stock adds up to nothing to sell."""
