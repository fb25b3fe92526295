"""
colorpalette exceptions.

Both errors derive from ValueError so existing ``except ValueError`` call
sites keep working.
"""


class ColorValidationError(ValueError):
    """Malformed color input, out-of-range component, bad count or unknown name."""


class UnsupportedSourceError(ValueError):
    """An image source could not be read, fetched or decoded."""
