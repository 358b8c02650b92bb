class ConfigurationError(ValueError):
    """Generic error thrown if there was an error while reading the configuration file."""


class DeployConfigurationError(ConfigurationError):
    """An error occurred while validating the deployment settings."""
