# static data

ACTIONS = ["view", "create", "update", "delete"]

ENTITIES = [
    ("role", "Roles"),
    ("user", "Users"),
    ("permission", "Permissions"),
    ("role_permission", "Role permissions"),
    ("location", "Locations"),
    ("salary_range", "Salary ranges"),
    ("category", "Categories"),
    ("company", "Companies"),
    ("job", "Jobs"),
]

permissions_data = [
    {
        "key": f"{entity}.{action}",
        "label": f"{action.capitalize()} {label.lower()}",
        "description": f"Allows the {action} action on {label.lower()}.",
    }
    for entity, label in ENTITIES
    for action in ACTIONS
]

LISTING_VIEW_KEYS = [
    "job.view", "company.view", "location.view", "salary_range.view", "category.view",
]

roles_data = [
    {
        "name": "admin",
        "description": "Full access to every resource.",
        "permissions": [p["key"] for p in permissions_data],
    },
    {
        "name": "employer",
        "description": "Posts and maintains job listings and company profiles.",
        "permissions": LISTING_VIEW_KEYS + [
            "job.create", "job.update", "job.delete",
            "company.create", "company.update",
        ],
    },
    {
        "name": "viewer",
        "description": "Browses job listings.",
        "permissions": list(LISTING_VIEW_KEYS),
    },
]

locations_data = [
    {"name": "Remote"},
    {"name": "New York"},
    {"name": "London"},
    {"name": "Tel Aviv"},
]

salary_ranges_data = [
    {"label": "Under 50k"},
    {"label": "50k - 100k"},
    {"label": "100k - 150k"},
    {"label": "150k+"},
]

categories_data = [
    {"name": "Engineering"},
    {"name": "Data"},
    {"name": "Finance"},
    {"name": "Operations"},
]
