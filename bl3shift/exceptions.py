class ShiftError(Exception):
    """Base exception for errors that abort a run"""
    pass


class ConfigError(ShiftError, ValueError):
    """Missing or invalid configuration"""
    pass


class AuthenticationError(ShiftError):
    """Login against the SHiFT API failed"""
    pass


class FetchError(ShiftError):
    """Code list, platform list or code info could not be retrieved"""
    pass


class HistoryError(ShiftError):
    """Redeemed codes could not be persisted"""
    pass
