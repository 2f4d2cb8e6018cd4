from shipwright.src.utils import warnings
from shipwright.src.utils.warnings import (
    WarningAggregator,
    add_warning_ios,
    flush_warnings,
    get_warnings,
)


def test_ios_warnings_are_scoped_to_ios() -> None:
    add_warning_ios("ios.usesIcloudStorage", "Enable iCloud", link="https://example.com")

    assert [w.property for w in get_warnings("ios")] == ["ios.usesIcloudStorage"]
    assert get_warnings("android") == []
    assert get_warnings()[0].link == "https://example.com"


def test_flush_returns_and_clears_warnings() -> None:
    add_warning_ios("ios.usesIcloudStorage", "Enable iCloud")

    flushed = flush_warnings()

    assert len(flushed) == 1
    assert get_warnings() == []
    assert flush_warnings() == []


def test_aggregator_filters_by_platform() -> None:
    aggregator = WarningAggregator()
    aggregator.add("ios", "ios.usesIcloudStorage", "Enable iCloud")
    aggregator.add("android", "android.package", "Missing package")

    assert [w.platform for w in aggregator.get("android")] == ["android"]
    assert len(aggregator.get()) == 2


def test_module_exposes_only_ios_helper() -> None:
    assert not hasattr(warnings, "add_warning_android")
