class TersifyError(Exception):
    # base exception for all tersify-specific errors.
    pass

class ConfigError(TersifyError):
    # errors related to configuration files or values.
    pass

class PluginError(TersifyError):
    # a plugin could not be loaded or broke the plugin contract.
    pass
