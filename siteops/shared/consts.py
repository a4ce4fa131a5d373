from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnumLogSink(str, Enum):
    FILE = "file"
    HTTP = "http"


REQUIRED_ENV_VARS = (
    "NEXTAUTH_SECRET",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GITMESH_CE_ADMIN_EMAILS",
)

OPTIONAL_ENV_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_REPO",
    "SENDGRID_API_KEY",
    "FROM_EMAIL",
)
