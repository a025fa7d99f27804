"""Default configuration values for lightclass."""

DEFAULTS: dict[str, object] = {
    # Class-name validation
    "NAME_MAX_LENGTH": 128,
    "NAME_PATTERN": None,
    "STRIP_NAMES": False,
}
