"""Reference data every new company starts from.

Module-level and immutable; builders hand out copies.
"""

from types import MappingProxyType

PERIOD_WEEKS_AFTER_FIRST = 53

DEFAULT_WORKDAY_HOURS = 8

DEFAULT_TEMPLATE = MappingProxyType(
    {
        "date": "",
        "role": "",
        "time": DEFAULT_WORKDAY_HOURS,
        "comment": "",
    }
)

WEEKEND = MappingProxyType({"id": 1, "name": "Weekend", "time": 0, "color": "#c5e9fb"})
CORPORATE = MappingProxyType({"id": 2, "name": "Corporate", "time": 0, "color": "#f3cce1"})
HOLIDAY = MappingProxyType({"id": 3, "name": "Holiday", "time": 0, "color": "#fff9a1"})

DEFAULT_DAY_TYPES = (WEEKEND, CORPORATE, HOLIDAY)

# "СEO" starts with a Cyrillic "С"; existing companies store it that way.
DEFAULT_AVAILABLE_POSITIONS = (
    "СEO",
    "CTO",
    "Designer",
    "Developer",
    "Junior Developer",
    "Junior QA",
    "Manager",
    "QA",
    "Senior Developer",
    "Senior QA",
    "Teamlead",
    "UX",
)
