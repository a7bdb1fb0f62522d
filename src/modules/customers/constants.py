"""Customer constants."""

DEFAULT_COUNTRY = "Colombia"
