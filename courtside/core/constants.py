"""Global constants for the courtside application."""

# Firestore collections
PROFILES_COLLECTION = "profiles"
EVENTS_COLLECTION = "events"
COURTS_COLLECTION = "courts"
INVITATIONS_COLLECTION = "invitations"
MATCHES_COLLECTION = "matches"
FIRESTORE_BATCH_LIMIT = 400

# Session keys
SESSION_USER_ID = "user_id"
SESSION_USER_EMAIL = "user_email"

# Profiles created before skill levels existed get this one
DEFAULT_SKILL_LEVEL = "intermediate"

UNKNOWN_EVENT_NAME = "Unknown Event"

# Court capacities: singles and doubles
COURT_CAPACITIES = (2, 4)

# Email-related constants
SMTP_AUTH_ERROR_CODE = 534
