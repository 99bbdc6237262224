"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Tenant slugs
MAX_SLUG_LENGTH = 63
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_PHONE_LENGTH = 32
MAX_URL_LENGTH = 2048
MAX_ROLE_NAME_LENGTH = 20
MAX_STATUS_LENGTH = 20

# Password requirements
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 12

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Token settings
ACCESS_TOKEN_JTI_LENGTH = 32

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"

# Redemption codes are printed and transcribed by hand at the prize desk.
# Excluded: 0, O, 1, I, L
REDEMPTION_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
REDEMPTION_CODE_LENGTH = 8

# Branding
HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{3,8}$"
DEFAULT_BRANDING: dict[str, str | None] = {
    "primary": "#1a8a6e",
    "accent": "#4ecdc4",
    "background": "#f0f7f0",
    "text": "#1a2e1a",
    "error": "#d4183d",
    "success": "#2E7D32",
    "logo_url": None,
    "bg_image_url": None,
}

# Login pages used in redirect hints
VISITOR_LOGIN_PATH = "/login"
ADMIN_LOGIN_PATH = "/admin/login"
SUPER_ADMIN_LOGIN_PATH = "/super-admin/login"
TENANT_NOT_FOUND_PATH = "/tenant-not-found"
COMPLETE_PROFILE_PATH = "/complete-profile"

# Editable site texts: key -> (description, default). An empty default for
# landing_title means the tenant's name is shown.
MAX_CONTENT_KEY_LENGTH = 64
MAX_CONTENT_VALUE_LENGTH = 4000
SITE_CONTENT_DEFAULTS: dict[str, tuple[str, str]] = {
    "landing_title": ("Landing page title", ""),
    "landing_subtitle": ("Landing page subtitle", "מסע חיות הבר"),
    "landing_description": (
        "Landing page introduction",
        "סרקו קודי QR בתחנות, גלו חיות מדהימות, אספו אותיות ופתרו את החידה"
        " כדי לזכות בפרס!",
    ),
    "game_instructions": (
        "Instructions on the game board",
        "גשו לאחת התחנות בפארק, סרקו את קוד ה-QR וגלו את החיה שמחכה לכם!",
    ),
    "game_tip": (
        "Tip under the game board",
        "טיפ: חפשו את תחנות ה-QR ליד השילוט והשבילים המסומנים",
    ),
    "redeem_instructions": (
        "Text above the prize code",
        "הציגו את הקוד הזה בדלפק הפרסים:",
    ),
}
