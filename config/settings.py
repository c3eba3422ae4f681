from pathlib import Path
import os
from dotenv import load_dotenv


def _env_bool(name: str, default: bool = False) -> bool:
	val = os.getenv(name)
	if val is None:
		return default
	return str(val).strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
	val = os.getenv(name)
	if val is None or not str(val).strip():
		return default
	return int(str(val).strip())


# Choose which env file to load by default.
# - Local/dev: .env
# - Production: production.env
# Can be overridden via ENV_FILE or DJANGO_ENV_FILE.
_bootstrap_env = os.getenv("DJANGO_ENV", "").strip().lower()
_bootstrap_debug = os.getenv("DEBUG")

_default_env_file = ".env"
if _bootstrap_env in ("prod", "production"):
	_default_env_file = "production.env"
elif _bootstrap_debug is not None and str(_bootstrap_debug).strip().lower() in ("0", "false", "no", "off"):
	_default_env_file = "production.env"

ENV_FILE = os.getenv("ENV_FILE", os.getenv("DJANGO_ENV_FILE", _default_env_file))
load_dotenv(ENV_FILE)

BASE_DIR = Path(__file__).resolve().parent.parent

# Core settings from environment
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
DEBUG = _env_bool("DEBUG", True)

# Hosts and site metadata
ALLOWED_HOSTS = [host.strip() for host in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if host.strip()]
CSRF_TRUSTED_ORIGINS = [origin.strip() for origin in os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if origin.strip()]
SITE_URL = os.getenv("SITE_URL", "http://localhost:8000")
SITE_NAME = os.getenv("SITE_NAME", "Donasi Jumat Berkah")

INSTALLED_APPS = [
	'django.contrib.humanize',
	"crispy_forms",
	"crispy_bootstrap5",
	'django.contrib.admin','django.contrib.auth','django.contrib.contenttypes',
	'django.contrib.sessions','django.contrib.messages','django.contrib.staticfiles',
	'import_export',
	'accounts','donations','ledger','progress','activities','audit','dashboards',
]
AUTH_USER_MODEL='accounts.User'

# The hosted backend is a managed Postgres instance; point DB_HOST/DB_PASSWORD at it.
DATABASES={
	'default':{
		'ENGINE': os.getenv('DB_ENGINE', 'django.db.backends.postgresql'),
		'NAME': os.getenv('DB_NAME', 'donations'),
		'USER': os.getenv('DB_USER', 'postgres'),
		'PASSWORD': os.getenv('DB_PASSWORD', 'password'),
		'HOST': os.getenv('DB_HOST', 'db' if not DEBUG else 'localhost'),
		'PORT': os.getenv('DB_PORT', '5432'),
	}
}

MIDDLEWARE = [
	'django.middleware.security.SecurityMiddleware',
	'django.contrib.sessions.middleware.SessionMiddleware',
	'django.middleware.common.CommonMiddleware',
	'django.middleware.csrf.CsrfViewMiddleware',
	'django.contrib.auth.middleware.AuthenticationMiddleware',
	'django.contrib.messages.middleware.MessageMiddleware',
	'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

TEMPLATES = [
	{
		'BACKEND': 'django.template.backends.django.DjangoTemplates',
		'DIRS': [BASE_DIR / 'templates'],
		'APP_DIRS': True,
		'OPTIONS': {
			'context_processors': [
				'django.template.context_processors.debug',
				'django.template.context_processors.request',
				'django.contrib.auth.context_processors.auth',
				'django.contrib.messages.context_processors.messages',
				'accounts.context_processors.admin_context',
			],
		},
	},
]
ROOT_URLCONF = 'config.urls'
WSGI_APPLICATION = 'config.wsgi.application'
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
# Uploaded payment proofs, receipts and timeline photos live here, one directory per bucket
MEDIA_URL = os.getenv('MEDIA_URL', '/media/')
MEDIA_ROOT = Path(os.getenv('MEDIA_ROOT', BASE_DIR / 'media'))
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ============================================================================
# LOGGING
# ============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOGGING = {
	'version': 1,
	'disable_existing_loggers': False,
	'formatters': {
		'simple': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
	},
	'handlers': {
		'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
	},
	'root': {'handlers': ['console'], 'level': LOG_LEVEL},
	'loggers': {
		'django': {'handlers': ['console'], 'level': 'WARNING', 'propagate': False},
	},
}

# ============================================================================
# DONATION SETTINGS
# ============================================================================

# Smallest pledge accepted by the donation form (rupiah)
DONATION_MIN_AMOUNT = _env_int('DONATION_MIN_AMOUNT', 1000)
DONATION_PRESET_AMOUNTS = [10000, 25000, 50000, 100000, 250000, 500000]

# Payment proof upload cap (5MB)
PAYMENT_PROOF_MAX_BYTES = _env_int('PAYMENT_PROOF_MAX_BYTES', 5 * 1024 * 1024)

# Fallback weekly target when no WeeklyTarget row exists for the current week
DEFAULT_WEEKLY_TARGET = _env_int('DEFAULT_WEEKLY_TARGET', 1000000)
PROGRESS_HISTORY_WEEKS = _env_int('PROGRESS_HISTORY_WEEKS', 4)

TIMELINE_PREVIEW_LIMIT = _env_int('TIMELINE_PREVIEW_LIMIT', 4)

# Merchant data embedded in the QRIS payload
QRIS_MERCHANT_NAME = os.getenv('QRIS_MERCHANT_NAME', 'DONASI JUMAT BERKAH')
QRIS_MERCHANT_CITY = os.getenv('QRIS_MERCHANT_CITY', 'JAKARTA')
QRIS_POSTAL_CODE = os.getenv('QRIS_POSTAL_CODE', '12345')
QRIS_MERCHANT_ID = os.getenv('QRIS_MERCHANT_ID', 'ID1234567890123')
QRIS_TERMINAL_ID = os.getenv('QRIS_TERMINAL_ID', 'T001')
QRIS_ACQUIRER_GUID = os.getenv('QRIS_ACQUIRER_GUID', 'ID.CO.QRIS.WWW')
QRIS_MCC = os.getenv('QRIS_MCC', '8661')

# Locale / TZ defaults
LANGUAGE_CODE = 'id'
TIME_ZONE = os.getenv('TIME_ZONE', 'Asia/Jakarta')
USE_I18N = True
USE_TZ = True

LOGIN_URL = "/login/"
LOGIN_REDIRECT_URL = "/admin-panel/"
LOGOUT_REDIRECT_URL = "/"

CRISPY_ALLOWED_TEMPLATE_PACKS = "bootstrap5"

CRISPY_TEMPLATE_PACK = "bootstrap5"

# Security defaults for production
SECURE_SSL_REDIRECT = _env_bool('SECURE_SSL_REDIRECT', False)
SESSION_COOKIE_SECURE = _env_bool('SESSION_COOKIE_SECURE', False)
CSRF_COOKIE_SECURE = _env_bool('CSRF_COOKIE_SECURE', False)
