from weekly_report_analytics.config import NUMERIC_COLUMNS
from weekly_report_analytics.glossary import (
    GLOSSARY_CATEGORIES,
    GLOSSARY_ENTRIES,
    format_glossary_value,
    get_entries_by_category,
    get_glossary_entry,
    get_key_from_label,
    search_glossary,
)


def test_every_metric_has_an_entry():
    assert set(GLOSSARY_ENTRIES) == set(NUMERIC_COLUMNS)


def test_entries_are_consistent():
    for key, entry in GLOSSARY_ENTRIES.items():
        assert entry.key == key
        assert entry.category in GLOSSARY_CATEGORIES
        assert all(m in GLOSSARY_ENTRIES for m in entry.related_metrics), key


def test_lookup():
    entry = get_glossary_entry("associates_on_assignment")
    assert entry.abbreviation == "AOA"
    assert get_glossary_entry("nope") is None


def test_search_is_case_insensitive():
    keys = {e.key for e in search_glossary("MARKUP")}
    assert "markup_percent" in keys

    keys = {e.key for e in search_glossary("direct hire")}
    assert keys == {"fees_revenue", "permanent_placement_fees"}


def test_blank_search_returns_everything():
    assert len(search_glossary("  ")) == len(GLOSSARY_ENTRIES)


def test_entries_by_category():
    fees = {e.key for e in get_entries_by_category("fees")}
    assert fees == {"fees_revenue", "conversion_fees", "permanent_placement_fees", "quick_hire"}


def test_label_mapping():
    assert get_key_from_label("GP %") == "gross_profit_percent"
    assert get_key_from_label("Unknown Label") is None


def test_format_glossary_value():
    assert format_glossary_value("total_sales", 140000) == "$140,000"
    assert format_glossary_value("revenue_change_prior_year", 12.345) == "12.3%"
    assert format_glossary_value("hours_billed", 14280.5) == "14,280.5 hrs"
    assert format_glossary_value("aoas_per_fte", 46.66) == "46.7"
    assert format_glossary_value("associates_on_assignment", 1420) == "1,420"
    assert format_glossary_value("missing", 3.5) == "3.5"
