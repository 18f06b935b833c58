"""
Exception classes for BinderDex.

All BinderDex exceptions inherit from BinderDexError,
making it easy to catch all library errors.

"No confident match" is not an exception anywhere in the library: matchers,
voters and the scan pipeline return ``None`` (or ``ScanStatus.NO_MATCH``)
for that case.

Example:
    >>> try:
    ...     placement = placer.locate(2000)
    ... except binderdex.InputRangeError as e:
    ...     print(f"Not a catalog number: {e}")
    ... except binderdex.BinderDexError as e:
    ...     print(f"BinderDex error: {e}")
"""


class BinderDexError(Exception):
    """
    Base exception for all BinderDex errors.

    Catch this to handle any BinderDex-specific error.
    """

    pass


class InputRangeError(BinderDexError, ValueError):
    """
    Raised when a catalog id or album position is outside its valid range.

    Example:
        >>> SlotPlacer().locate(0)
        InputRangeError: Catalog number must be between 1 and 1025, got 0
    """

    pass


class ConfigurationError(BinderDexError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> AlbumConfig(slots_per_page=0)
        ConfigurationError: slots_per_page must be >= 1, got 0
    """

    pass


class CatalogError(BinderDexError):
    """Raised when a catalog dataset cannot be read or violates its invariants."""

    pass


class UnknownNameError(BinderDexError, KeyError):
    """
    Raised when a lookup query does not name any catalog entry.

    Example:
        >>> placer.lookup("missingno", index)
        UnknownNameError: "I don't recognize 'missingno'"
    """

    pass
