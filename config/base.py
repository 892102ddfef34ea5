# config/base.py
import os


def _coerce_bool(value, default=False):
    """Convert environment-style truthy/falsey values to bool."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    value_str = str(value).strip().lower()
    if value_str in {"1", "true", "yes", "on"}:
        return True
    if value_str in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_origin_list(value):
    """
    Parse a comma-separated list of CORS origins, keeping order and removing duplicates.

    Returns:
        str | tuple[str, ...]: "*" when unset, otherwise the normalized origins.
    """
    if not value or value.strip() == "*":
        return "*"

    seen = set()
    origins = []
    for raw_item in value.split(","):
        item = raw_item.strip().rstrip("/")
        if not item or item in seen:
            continue
        seen.add(item)
        origins.append(item)
    return tuple(origins) or "*"


def _parse_positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class Config:
    _flask_env = os.environ.get("FLASK_ENV", "development")
    _is_production = _flask_env == "production"

    SECRET_KEY = os.environ.get("SECRET_KEY")

    # Only require SECRET_KEY in production mode
    if not SECRET_KEY and _is_production:
        raise ValueError(
            "SECRET_KEY environment variable is required in production. "
            'Generate with: python -c "import secrets; print(secrets.token_hex(32))"'
        )
    if not SECRET_KEY:
        SECRET_KEY = "dev-secret-key-change-in-production"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # Spreadsheet import limits
    IMPORT_MAX_UPLOAD_BYTES = _parse_positive_int(os.environ.get("IMPORT_MAX_UPLOAD_MB"), 2) * 1024 * 1024
    IMPORT_MAX_ROWS = _parse_positive_int(os.environ.get("IMPORT_MAX_ROWS"), 2000)

    # Request body cap; larger than the import limit so oversize workbooks get the importer's message
    MAX_CONTENT_LENGTH = _parse_positive_int(os.environ.get("MAX_CONTENT_LENGTH_MB"), 5) * 1024 * 1024

    CORS_ORIGINS = _parse_origin_list(os.environ.get("CORS_ORIGINS"))
    CORS_ENABLED = _coerce_bool(os.environ.get("CORS_ENABLED"), default=True)

    JSON_SORT_KEYS = False


class DevelopmentConfig(Config):
    DEBUG = True
    # Get the project root directory (parent of config directory)
    _config_dir = os.path.dirname(os.path.abspath(__file__))
    _project_root = os.path.dirname(_config_dir)
    instance_path = os.path.join(_project_root, "instance")

    if not os.path.exists(instance_path):
        os.makedirs(instance_path, exist_ok=True)

    db_path = os.path.join(instance_path, "address_book_dev.db")
    # SQLite URIs need forward slashes on Windows
    db_path_normalized = db_path.replace("\\", "/")
    db_uri = f"sqlite:///{db_path_normalized}"

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", db_uri)
    SQLALCHEMY_ECHO = _coerce_bool(os.environ.get("SQLALCHEMY_ECHO"), default=False)
    if SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": 5,
            }
        }
    else:
        SQLALCHEMY_ENGINE_OPTIONS = {}


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get("SECRET_KEY", "test-secret-key-for-testing-only")
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {
            "check_same_thread": False,
            "timeout": 5,
        }
    }


class ProductionConfig(Config):
    DEBUG = False
    uri = os.environ.get("DATABASE_URL")
    if uri and uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_DATABASE_URI = uri
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
