"""Common constants."""

# Job statuses
JOB_STATUS_ACTIVE = "Active"
JOB_STATUSES = ["Active", "Inactive"]

# Experience levels (long form is what jobs store)
EXPERIENCE_LEVELS = [
    "Entry Level",
    "Mid Level",
    "Senior Level",
    "Executive",
]

EXPERIENCE_SHORT_FORMS = {
    "Entry Level": "Entry",
    "Mid Level": "Mid",
    "Senior Level": "Senior",
    "Executive": "Executive",
}

DEFAULT_EXPERIENCE_LEVEL = "Entry Level"

# Company statuses
COMPANY_STATUSES = ["Active", "Inactive"]

# Job sort options
SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_SALARY_HIGH_TO_LOW = "salary-high-to-low"
SORT_SALARY_LOW_TO_HIGH = "salary-low-to-high"
SALARY_SORTS = (SORT_SALARY_HIGH_TO_LOW, SORT_SALARY_LOW_TO_HIGH)

# Homepage category icons by industry
CATEGORY_ICONS = {
    "Technology": "💻",
    "Finance": "💰",
    "Healthcare": "🏥",
    "Education": "📚",
    "Marketing": "📣",
}
DEFAULT_CATEGORY_ICON = "📦"

# Upload subdirectory for profile pictures and company logos
PROFILE_UPLOAD_SUBDIR = "profiles"


def normalize_experience_level(value):
    """Map a long or short experience label to the stored long form, None if unknown."""
    if not value:
        return None
    value = value.strip()
    if value in EXPERIENCE_LEVELS:
        return value
    for long_form, short_form in EXPERIENCE_SHORT_FORMS.items():
        if value.lower() == short_form.lower() or value.lower() == long_form.lower():
            return long_form
    return None
