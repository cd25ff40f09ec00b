from rollscope._core.config.config import Config, ConfigurationError

__all__ = ['Config', 'ConfigurationError']
