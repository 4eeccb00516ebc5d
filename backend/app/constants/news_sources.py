"""Default feed registry and keyword sets for the Dubai real-estate news sync."""

from typing import Any

# Default RSS feeds, each with its own relevance keywords
DEFAULT_FEEDS: list[dict[str, Any]] = [
    {
        "name": "Arabian Business Real Estate",
        "url": "https://www.arabianbusiness.com/industries/real-estate/feed",
        "keywords": [
            "dubai", "uae", "property", "villa", "apartment", "developer",
            "emaar", "damac", "nakheel", "sobha", "azizi", "binghatti",
            "palm", "marina", "downtown", "off-plan", "real estate",
            "investment", "rental", "yield", "golden visa",
        ],
    },
    {
        "name": "Dubai Chronicle",
        "url": "https://www.dubaichronicle.com/feed/",
        "keywords": [
            "property", "real estate", "dubai", "villa", "apartment", "developer",
            "investment", "rent", "buy", "market", "launch", "project",
        ],
    },
    {
        "name": "Properties Market UAE",
        "url": "https://www.properties.market/ae/blog/feed/",
        "keywords": [
            "dubai", "property", "real estate", "investment", "villa", "apartment",
            "developer", "market", "buy", "rent", "guide",
        ],
    },
    {
        "name": "Key One Realty",
        "url": "https://keyone.com/blog/feed/",
        "keywords": [
            "dubai", "property", "real estate", "investment", "airbnb", "rental",
            "villa", "apartment", "roi", "yield",
        ],
    },
]

# Global keywords applied to every feed on top of its own set
DUBAI_KEYWORDS: list[str] = [
    # Neighborhoods
    "palm jumeirah", "downtown dubai", "dubai marina", "jvc", "jumeirah village",
    "business bay", "difc", "meydan", "dubai hills", "arabian ranches",
    "bluewaters", "creek harbour", "jbr",
    # Developers
    "emaar", "damac", "nakheel", "sobha", "azizi", "binghatti", "ellington",
    "meraas", "omniyat",
    # Investment terms
    "yield", "roi", "off-plan", "off plan", "handover", "golden visa", "rera",
    "dld", "rental",
    # General real estate
    "dubai", "uae", "property", "real estate", "villa", "apartment", "townhouse",
    "penthouse", "developer", "launch", "project", "investment", "buyer", "investor",
    # Economy
    "gdp", "economy", "growth", "inflation", "interest rate", "central bank",
    # Tourism & hospitality
    "tourism", "hotel", "visitor", "expo", "event", "hospitality",
    # Infrastructure
    "metro", "airport", "road", "infrastructure", "development", "transport",
    # Business
    "business", "company", "startup", "expansion", "headquarters",
]

# Developer names that put an item in the developer_news category
DEVELOPER_NAMES: list[str] = ["emaar", "damac", "nakheel", "sobha"]

# Areas reported in an article's affected_areas
DUBAI_AREAS: list[str] = [
    "Downtown Dubai", "Dubai Marina", "Palm Jumeirah", "JVC", "Jumeirah Village Circle",
    "Business Bay", "DIFC", "Meydan", "Dubai Hills", "Dubai Hills Estate",
    "Arabian Ranches", "Bluewaters", "Creek Harbour", "Dubai Creek Harbour", "JBR",
    "Jumeirah Beach Residence", "JLT", "Jumeirah Lake Towers", "Al Barsha",
    "Sports City", "Motor City", "Silicon Oasis", "Jumeirah", "City Walk",
    "MBR City", "Mohammed Bin Rashid City", "Town Square", "Damac Hills",
    "Emaar Beachfront", "Dubai South", "Dubai Investment Park",
]

HIGH_VALUE_KEYWORDS: list[str] = [
    "billion", "million", "record", "surge", "launch", "golden visa", "roi", "yield",
]
MEDIUM_VALUE_KEYWORDS: list[str] = [
    "investment", "price", "growth", "developer", "project", "expansion",
]
