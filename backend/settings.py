"""
Django settings for dsp_donations project - Production Ready
"""

import os
import dj_database_url
from pathlib import Path

# .env Datei laden für Development
from dotenv import load_dotenv

load_dotenv()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-7m3k!x0q2w#donations-dev-only-key-r8v^c5t1z&y9"
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.environ.get("DEBUG", "True").lower() == "true"

# Production-ready ALLOWED_HOSTS
ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

# Application definition
INSTALLED_APPS = [
    "jazzmin",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third Party Apps
    "corsheaders",
    "rest_framework",
    # Local Apps
    "core.donations.apps.DonationsConfig",
    # Montonio App
    "core.montonio_integration.apps.MontonioIntegrationConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# CORS Settings - Production-ready
CORS_ALLOWED_ORIGINS = os.environ.get(
    "CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:5174"
).split(",")
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = [
    "GET",
    "OPTIONS",
    "POST",
]
CORS_ALLOWED_ORIGIN_REGEXES = [
    r"^http://localhost:517[0-9]$",
    r"^http://127\.0\.0\.1:517[0-9]$",
]

ROOT_URLCONF = "backend.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "backend.wsgi.application"

# Database - Production-ready mit PostgreSQL
if os.environ.get("DATABASE_URL"):
    # Production: PostgreSQL
    DATABASES = {"default": dj_database_url.parse(os.environ.get("DATABASE_URL"))}
else:
    # Development: SQLite
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"
    },
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalization
# Montonio payment page language follows the active language (see gateway.resolve_locale)
LANGUAGE_CODE = os.environ.get("LANGUAGE_CODE", "et")
LANGUAGES = [
    ("et", "Eesti"),
    ("en", "English"),
    ("lv", "Latviešu"),
    ("lt", "Lietuvių"),
    ("fi", "Suomi"),
    ("pl", "Polski"),
    ("ru", "Русский"),
]
TIME_ZONE = "Europe/Tallinn"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images) - Production-ready
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"
    },
}

# Security Settings für Production
if not DEBUG:
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_SECONDS = 31536000
    SECURE_REDIRECT_EXEMPT = []
    SECURE_SSL_REDIRECT = True
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework Settings
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.AllowAny",),
}

# Frontend URL für Links (Erfolgs-/Fehlerseiten)
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")

# Jazzmin Settings
JAZZMIN_SETTINGS = {
    "site_title": "DSP Donations Admin",
    "site_header": "DSP Donations",
    "site_brand": "DSP Donations",
    "welcome_sign": "Welcome to the DSP donations admin",
    "copyright": "DSP Team",
    "topmenu_links": [
        {"name": "Home", "url": "admin:index", "permissions": ["auth.view_user"]},
        {"name": "Website", "url": "/", "new_window": True},
    ],
    "icons": {
        "auth": "fas fa-users-cog",
        "auth.user": "fas fa-user",
        "auth.Group": "fas fa-users",
        "donations": "fas fa-hand-holding-heart",
        "donations.Donation": "fas fa-euro-sign",
        "donations.DonationForm": "fas fa-bullhorn",
    },
    "show_ui_builder": False,
    "changeform_format": "horizontal_tabs",
    "order_with_respect_to": [
        "donations",
        "auth",
    ],
}

# ---- Payments / Montonio ----
# Montonio redirects donors to their bank (Baltic and Finnish bank links).
# We support both the SANDBOX environment (test payments) and PRODUCTION.

# Mode toggle ("Enable Test Mode")
#    - MONTONIO_SANDBOX_MODE=True  → sandbox-payments.montonio.com (fake payments)
#    - MONTONIO_SANDBOX_MODE=False → payments.montonio.com (real payments)
MONTONIO_SANDBOX_MODE = (
    os.environ.get("MONTONIO_SANDBOX_MODE", "True").lower() == "true"
)

# API keys from the Montonio partner system
#    - The access key identifies the merchant and is echoed back in payment tokens.
#    - The secret key signs outgoing and verifies incoming payment tokens (HS256).
#    - NEVER expose the secret key to the frontend or commit it to Git.
MONTONIO_ACCESS_KEY = os.environ.get("MONTONIO_ACCESS_KEY", "")
MONTONIO_SECRET_KEY = os.environ.get("MONTONIO_SECRET_KEY", "")

# Bank transfer detail (e.g. "Donation")
MONTONIO_MERCHANT_NAME = os.environ.get("MONTONIO_MERCHANT_NAME", "")

# Payment description components
#    - Joined with MONTONIO_DESCRIPTION_SEPARATOR after the bank transfer detail.
MONTONIO_INCLUDE_DONATION_ID = (
    os.environ.get("MONTONIO_INCLUDE_DONATION_ID", "True").lower() == "true"
)
MONTONIO_INCLUDE_CAMPAIGN_NAME = (
    os.environ.get("MONTONIO_INCLUDE_CAMPAIGN_NAME", "False").lower() == "true"
)
MONTONIO_INCLUDE_PERSONAL_CODE = (
    os.environ.get("MONTONIO_INCLUDE_PERSONAL_CODE", "True").lower() == "true"
)
MONTONIO_DESCRIPTION_SEPARATOR = os.environ.get("MONTONIO_DESCRIPTION_SEPARATOR", " / ")

# Public base URL of this backend
#    - Montonio notifies `SITE_URL/?give-listener=montonio&...` and returns donors there.
SITE_URL = os.environ.get("SITE_URL", "http://localhost:8000")

# Donor landing pages after a callback was resolved
DONATION_SUCCESS_URL = os.environ.get(
    "DONATION_SUCCESS_URL", f"{FRONTEND_URL}/donation/success"
)
DONATION_FAILURE_URL = os.environ.get(
    "DONATION_FAILURE_URL", f"{FRONTEND_URL}/donation/failed"
)
