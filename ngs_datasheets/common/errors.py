"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class DatasheetRootError(PipelineError):
    """Raised when the datasheet root directory cannot be listed. Fatal for the run."""

    error_code = "ROOT_UNREADABLE"


class RegionReadError(PipelineError):
    """Raised when a single region file cannot be opened or decoded."""

    error_code = "REGION_READ_ERROR"
