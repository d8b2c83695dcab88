"""Error taxonomy for the session event logger."""


class HookLogError(Exception):
    """Base class for all session logger failures"""
    pass


class ParseError(HookLogError, ValueError):
    """Raised when stdin does not hold valid JSON text"""
    pass


class FilesystemError(HookLogError, OSError):
    """Raised when the base directory cannot be created or the log cannot be appended"""
    pass
