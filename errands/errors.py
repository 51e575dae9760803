"""
ERRANDS - Error Types
=====================
Every fallible store operation raises one of these. The CLI maps them to
exit codes in one place (see cli.main).
"""


class ErrandsError(Exception):
    """Base class for all errands failures"""
    exit_code = 1


# ============================================================
# FILE ERRORS
# ============================================================

class ErrandsIOError(ErrandsError, OSError):
    """Errands file could not be read or written"""
    exit_code = 2


class ErrandsNotFoundError(ErrandsIOError):
    """No errands file at the requested (or any probed) location"""
    exit_code = 3


class ErrandsExistsError(ErrandsIOError):
    """Refused to overwrite an existing, non-empty errands file"""
    exit_code = 2


class ErrandsParseError(ErrandsError, ValueError):
    """Errands file is not a valid priority -> list-of-strings document"""
    exit_code = 4


# ============================================================
# QUERY ERRORS
# ============================================================

class PriorityNotFoundError(ErrandsError, LookupError):
    """Priority bucket was cleaned and is absent from the list"""
    exit_code = 5

    def __init__(self, priority):
        self.priority = priority
        super().__init__(f"Priority not found: {priority}")


class ErrandsPatternError(ErrandsError, ValueError):
    """Ignore pattern is not a valid regular expression"""
    exit_code = 6
