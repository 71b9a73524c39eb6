import logging

from alpi.domain.phases import RunFilter, build_registry, plan, select_phases, unknown_names
from alpi.domain.variant import Variant


def names(phases):
    return [p.name for p in phases]


def test_registry_order():
    assert names(build_registry()) == ["core", "suckless", "niri", "lookandfeel", "apps", "optimize"]


def test_no_filter_selects_everything():
    assert names(select_phases(build_registry(), RunFilter())) == names(build_registry())


def test_include_keeps_declaration_order():
    selected = select_phases(build_registry(), RunFilter.from_csv(only="optimize,core"))
    assert names(selected) == ["core", "optimize"]


def test_include_wins_over_exclude():
    selected = select_phases(build_registry(), RunFilter.from_csv(only="apps", skip="apps"))
    assert names(selected) == ["apps"]


def test_exclude_subtracts():
    selected = select_phases(build_registry(), RunFilter.from_csv(skip="apps, optimize"))
    assert names(selected) == ["core", "suckless", "niri", "lookandfeel"]


def test_unknown_names_are_ignored_with_a_warning(caplog):
    run_filter = RunFilter.from_csv(only="core,bogus", skip="nope")
    with caplog.at_level(logging.WARNING):
        selected = select_phases(build_registry(), run_filter)
    assert names(selected) == ["core"]
    assert unknown_names(build_registry(), run_filter) == ["bogus", "nope"]
    assert "bogus" in caplog.text


def test_only_unknown_names_selects_nothing():
    assert select_phases(build_registry(), RunFilter.from_csv(only="bogus")) == []


def test_plan_applies_variant_gate():
    result = {p.name: runs for p, runs in plan(build_registry(), RunFilter(), Variant.X11)}
    assert result["suckless"] is True
    assert result["niri"] is False
    assert result["core"] is True


def test_plan_both_runs_every_phase():
    assert all(runs for _, runs in plan(build_registry(), RunFilter(), Variant.BOTH))


def test_csv_parsing_drops_blanks():
    assert RunFilter.from_csv(only=" core, ,apps,").include == frozenset({"core", "apps"})
