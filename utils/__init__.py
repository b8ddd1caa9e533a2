from .logger import APP_PACKAGES, setup_app_logging, setup_logger

__all__ = ["APP_PACKAGES", "setup_app_logging", "setup_logger"]
