from .config import SDK_CONFIG, AppConfig, load_config

__all__ = ["SDK_CONFIG", "AppConfig", "load_config"]
