"""
API documentation metadata for the Swagger/OpenAPI document.
"""

API_INFO = {
    "title": "Savings Goal Tracker",
    "version": "1.0.0",
    "description": (
        "Savings goal tracking API.\n\n"
        "- Goals with contributions, milestones and automatic completion.\n"
        "- Per-user statistics and dashboard.\n"
        "- Self-service profile and personal analytics.\n"
        "- Admin user management, platform statistics and notification feed.\n"
        "- JWT authentication."
    ),
    "license": {"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
}

TAGS = [
    {
        "name": "Authentication",
        "description": "Register and log in",
    },
    {
        "name": "Goals",
        "description": "Savings goals, contributions and dashboard",
    },
    {"name": "Users", "description": "Profile, preferred currency and password"},
    {"name": "Analytics", "description": "Personal activity history and metrics"},
    {"name": "Admin", "description": "Platform-wide user and goal management"},
    {
        "name": "Admin notifications",
        "description": "Polled feed of platform events for administrators",
    },
]
