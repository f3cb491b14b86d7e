"""
Role and Feature Configuration
Defines which application features each user role can reach.
Used by /auth/me to drive role-based navigation.
"""

# Roles accepted by the user_profiles.role check constraint
DEFAULT_ROLE = "student"
ROLES = ["student", "teacher"]

# Features and the page each one lives on
FEATURES = {
    "sign_translator": {
        "path": "/sign-translator",
        "description": "Sign Translator"
    },
    "video_captioning": {
        "path": "/video-captioning",
        "description": "Video Captioning"
    },
    "notes": {
        "path": "/notes",
        "description": "Notes"
    },
    "students": {
        "path": "/students",
        "description": "Students"
    }
}

COMMON_FEATURES = ["sign_translator", "video_captioning", "notes"]

# Feature labels that differ per role
ROLE_LABELS = {
    "student": {"notes": "My Notes"},
    "teacher": {"notes": "All Notes"}
}

ROLE_FEATURES = {
    "student": COMMON_FEATURES,
    "teacher": COMMON_FEATURES + ["students"]
}


def normalize_role(role) -> str:
    """Return role if it is a known role, otherwise the default role."""
    if isinstance(role, str) and role in ROLES:
        return role
    return DEFAULT_ROLE


def get_role_features(role: str):
    """
    Returns the navigation entries for a role
    Format: [
        {"name": "sign_translator", "path": "/sign-translator", "label": "Sign Translator"},
        ...
    ]
    """
    role = normalize_role(role)
    labels = ROLE_LABELS.get(role, {})
    features = []
    for name in ROLE_FEATURES[role]:
        feature = FEATURES[name]
        features.append({
            "name": name,
            "path": feature["path"],
            "label": labels.get(name, feature["description"])
        })
    return features
