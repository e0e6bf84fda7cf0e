"""Field Tracker API: meetings, action items, weekly status and media records."""
