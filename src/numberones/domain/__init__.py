"""Domain layer: chart entries, date/text value objects and exceptions."""
