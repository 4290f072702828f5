

class DqDashboardError(Exception):
    """Base exception for all dq_dashboard errors"""
    pass

class ConfigError(DqDashboardError):
    """Invalid or inconsistent global.json"""
    pass

class IngestionError(DqDashboardError):
    """
    A source CSV could not be read or parsed:
    missing file, corrupt upload, empty or malformed content
    """
    pass

class UnknownDatasetKindError(DqDashboardError, KeyError):
    """No dataset kind matches the given identifier"""
    pass
