from psychics.abilities.base import Ability
from psychics.components.esper_statistic import EsperStatistic, stats_from_attributes
from psychics.tooltip.builder import TooltipBuilder
from psychics.tooltip.render import format_title, render_tooltip

from tests.helpers import ability_config, make_concept


def _fireball(**overrides):
    fields = dict(
        display_name="화염구",
        cooldown_ticks=40,
        cost=10.0,
        casting_ticks=20,
        range=5.0,
        description=["<damage>의 피해, 재사용 <cooldown-time> 초"],
        damage={"type": "FIRE", "stats": {"attack": 1.5}},
    )
    fields.update(overrides)
    return ability_config(**fields)


def test_stat_block_converts_ticks_to_seconds():
    tooltip = make_concept(_fireball()).render_tooltip()
    assert tooltip.title == format_title("화염구", "ACTIVE")
    assert tooltip.stats[:4] == (
        "재사용 대기시간: 2.0 초",
        "마나 소모: 10.0",
        "시전 시간: 1.0 초",
        "사거리: 5.0 블록",
    )


def test_lines_follow_fixed_section_order():
    concept = make_concept(
        _fireball(duration_ticks=60, healing={"heal": 1.0}),
        on_render_tooltip=lambda tooltip, stats: tooltip.add_footer("extra"),
    )
    tooltip = concept.render_tooltip()
    labels = [line.split(":")[0] for line in tooltip.stats]
    assert labels == ["재사용 대기시간", "마나 소모", "시전 시간", "지속 시간", "사거리", "치유량", "피해량(화염)"]
    assert tooltip.lines[0] == tooltip.title
    assert tooltip.lines[-2:] == (tooltip.description[0], "extra")


def test_zero_values_are_omitted():
    tooltip = make_concept(ability_config(description=["plain"])).render_tooltip()
    assert tooltip.stats == ()
    assert tooltip.description == ("plain",)


def test_interruptible_cast_is_labelled_as_channeling():
    tooltip = make_concept(_fireball(interruptible=True)).render_tooltip()
    assert "집중 시간: 1.0 초" in tooltip.stats
    assert not any(line.startswith("시전 시간") for line in tooltip.stats)


def test_healing_without_stat_lookup_renders_zero():
    concept = make_concept(
        ability_config(healing={"heal": 2.0}, description=["<healing> 회복"]),
    )
    tooltip = concept.render_tooltip()
    assert "치유량: 0.0" in tooltip.stats
    assert tooltip.description == ("0.0 회복",)
    assert tooltip.unresolved == ()


def test_stat_lookup_drives_damage_and_healing():
    concept = make_concept(_fireball(healing={"heal": 2.0}, description=["<damage> / <healing>"]))
    stats = stats_from_attributes({"attack": 12, "heal": 5})
    tooltip = concept.render_tooltip(stats)
    assert tooltip.description == ("18.0 / 10.0",)
    assert "피해량(화염): 18.0" in tooltip.stats


def test_render_is_pure_for_same_inputs():
    concept = make_concept(_fireball())
    stats = stats_from_attributes({"attack": 3})
    first = concept.render_tooltip(stats)
    second = concept.render_tooltip(stats)
    assert str(first) == str(second)
    assert concept.description == ("<damage>의 피해, 재사용 <cooldown-time> 초",)


def test_failing_hook_keeps_standard_content():
    def broken_hook(tooltip, stats):
        tooltip.description.clear()
        tooltip.add_footer("half written")
        raise RuntimeError("boom")

    concept = make_concept(_fireball(), on_render_tooltip=broken_hook)
    tooltip = concept.render_tooltip()
    baseline = render_tooltip(concept)
    assert tooltip == baseline
    assert tooltip.description == ("0.0의 피해, 재사용 2.0 초",)
    assert tooltip.footer == ()


def test_hook_may_alter_templates_and_title():
    def hook(tooltip, stats):
        tooltip.title = "custom"
        tooltip.add_templates({"damage": stats(EsperStatistic.of(attack=2.0)) + 1})

    concept = make_concept(_fireball(), on_render_tooltip=hook)
    tooltip = concept.render_tooltip(stats_from_attributes({"attack": 4}))
    assert tooltip.title == "custom"
    assert tooltip.description[0].startswith("9.0의 피해")


def test_builder_copy_is_independent():
    builder = TooltipBuilder()
    builder.add_stats("a", 1.0)
    clone = builder.copy()
    clone.add_stats("b", 2.0)
    clone.add_description(["x"])
    assert [s.label for s in builder.stats] == ["a"]
    assert builder.description == []


def test_passive_title_uses_fixed_columns():
    concept = make_concept(ability_config(type="PASSIVE", display_name="Aura"), ability_class=Ability)
    title = concept.render_tooltip().title
    assert len(title) == 32
    assert title.startswith("Aura ")
    assert title.endswith("PASSIVE")
