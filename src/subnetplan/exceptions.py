"""Planning exception classes."""


class PlanError(Exception):
    """Base exception for planning operations."""

    pass


# =============================================================================
# Resolution Errors
# =============================================================================


class UnknownVariable(PlanError):
    """A values file or override named a variable that is not declared."""

    def __init__(self, name: str, source: str):
        self.name = name
        self.source = source
        super().__init__(f"Unknown variable '{name}' in {source}")


class TypeMismatch(PlanError):
    """A variable value does not match the declared type."""

    def __init__(self, name: str, expected: str, value: object, reason: str = ""):
        self.name = name
        self.expected = expected
        self.value = value
        message = f"Variable '{name}' expects {expected}, got {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InvalidValuesFile(PlanError):
    """Values file is missing, unreadable or not a mapping."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Invalid values file '{path}': {reason}")


# =============================================================================
# Catalog Errors
# =============================================================================


class CatalogUnavailable(PlanError):
    """Zone inventory query failed (network, authorization or bad response)."""

    def __init__(self, region: str, reason: str):
        self.region = region
        self.reason = reason
        super().__init__(f"Zone catalog unavailable for region '{region}': {reason}")


# =============================================================================
# Expansion Errors
# =============================================================================


class AllocationOverflow(PlanError):
    """Allocation index or prefix length does not fit the parent block."""

    def __init__(self, index: int, bound: int, message: str):
        self.index = index
        self.bound = bound
        super().__init__(message)


class ZoneIndexOutOfRange(PlanError):
    """More subnets requested than there are zones to place them in."""

    def __init__(self, index: int, zone_count: int):
        self.index = index
        self.bound = zone_count
        super().__init__(
            f"No zone for subnet index {index}: catalog has {zone_count} zone(s)"
        )
