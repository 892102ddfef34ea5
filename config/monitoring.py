# config/monitoring.py

import os


class MonitoringConfig:
    """Logging configuration"""

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json")  # 'json' or 'text'
    LOG_DIR = os.environ.get("LOG_DIR", "logs")
    LOG_FILE_MAX_BYTES = int(os.environ.get("LOG_FILE_MAX_BYTES", 10485760))  # 10MB
    LOG_FILE_BACKUP_COUNT = int(os.environ.get("LOG_FILE_BACKUP_COUNT", 10))

    ENABLE_FILE_LOGGING = os.environ.get("ENABLE_FILE_LOGGING", "true").lower() == "true"
    ENABLE_CONSOLE_LOGGING = os.environ.get("ENABLE_CONSOLE_LOGGING", "true").lower() == "true"


class DevelopmentMonitoringConfig(MonitoringConfig):
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")
    ENABLE_FILE_LOGGING = os.environ.get("ENABLE_FILE_LOGGING", "false").lower() == "true"


class TestingMonitoringConfig(MonitoringConfig):
    LOG_LEVEL = "DEBUG"
    LOG_FORMAT = "text"
    ENABLE_FILE_LOGGING = False


class ProductionMonitoringConfig(MonitoringConfig):
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
