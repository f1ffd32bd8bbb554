"""
Pytest configuration and fixtures for ETFI tests.

Provides row factories and a small town-focus scenario:

    TRADITION_TOWN_TRADE (active)
      -> MOD_TOWN_GOLD        subject REQSET_TOWN (REQUIREMENT_CITY_IS_TOWN),
                              Tooltip LOC_BONUS_GOLD
      -> MOD_CITY_SCIENCE     subject REQSET_CITY (REQUIREMENT_CITY_IS_CAPITAL)
"""
import pytest
import yaml

from etfi.host import GameTables, LocaleTable, StaticRulesModel, Table
from etfi.models import (
    ActiveRule,
    EffectTypeDefinition,
    ModifierArgument,
    ModifierDisplayString,
    ModifierRow,
    RequirementArgument,
    RequirementRow,
    RequirementSetLink,
    RequirementSetRow,
    RuleModifierLink,
)
from etfi.packs import SCHEMA_VERSION


# =============================================================================
# Factory Helpers
# =============================================================================

def make_rule(
    rule_id="TRADITION_TOWN_TRADE",
    name_tag=None,
    localized_name=None,
) -> ActiveRule:
    return ActiveRule(rule_id=rule_id, name_tag=name_tag, localized_name=localized_name)


def make_modifier(
    modifier_id="MOD_TOWN_GOLD",
    modifier_type="MODTYPE_CITY_ADJUST_YIELD",
    subject=None,
    owner=None,
) -> ModifierRow:
    return ModifierRow(
        modifier_id=modifier_id,
        modifier_type=modifier_type,
        subject_requirement_set_id=subject,
        owner_requirement_set_id=owner,
    )


def make_requirement_set(set_id, requirements, set_type="REQUIREMENTSET_TEST_ALL"):
    """
    Rows for one requirement set.

    Args:
        set_id: RequirementSetId
        requirements: list of (requirement_id, requirement_type) pairs

    Returns:
        (set_row, links, requirement_rows)
    """
    set_row = RequirementSetRow(requirement_set_id=set_id, requirement_set_type=set_type)
    links = [RequirementSetLink(requirement_set_id=set_id, requirement_id=rid) for rid, _ in requirements]
    rows = [RequirementRow(requirement_id=rid, requirement_type=rtype) for rid, rtype in requirements]
    return set_row, links, rows


def make_tables(
    links=None,
    modifiers=None,
    effect_types=None,
    requirement_sets=None,
    requirement_arguments=None,
    modifier_arguments=None,
    modifier_strings=None,
    omit=(),
) -> GameTables:
    """
    Build GameTables from rows.

    `requirement_sets` is a list of make_requirement_set() results.
    Attribute names in `omit` are left absent (None).
    """
    set_rows, set_links, req_rows = [], [], []
    for set_row, links_, rows in requirement_sets or []:
        set_rows.append(set_row)
        set_links.extend(links_)
        req_rows.extend(rows)

    tables = {
        "rule_modifiers": Table("TraditionModifiers", links or []),
        "modifiers": Table("Modifiers", modifiers or []),
        "effect_types": Table("DynamicModifiers", effect_types or []),
        "requirement_sets": Table("RequirementSets", set_rows),
        "requirement_set_requirements": Table("RequirementSetRequirements", set_links),
        "requirements": Table("Requirements", req_rows),
        "requirement_arguments": Table("RequirementArguments", requirement_arguments or []),
        "modifier_arguments": Table("ModifierArguments", modifier_arguments or []),
        "modifier_strings": Table("ModifierStrings", modifier_strings or []),
    }
    for name in omit:
        tables[name] = None
    return GameTables(**tables)


def make_link(rule_id, modifier_id) -> RuleModifierLink:
    return RuleModifierLink(rule_id=rule_id, modifier_id=modifier_id)


def make_tooltip(modifier_id, tag) -> ModifierArgument:
    return ModifierArgument(modifier_id=modifier_id, name="Tooltip", value=tag)


# =============================================================================
# Town Scenario
# =============================================================================

TOWN_LOCALE = {
    "LOC_BONUS_GOLD": "Bonus Gold",
    "LOC_TRADITION_TOWN_TRADE_NAME": "Town Trade",
    "LOC_MOD_TOWN_GOLD_DESCRIPTION": "+2 Gold in Towns",
    "LOC_MOD_ETFI_BONUS_YIELDS": "Bonus Yields",
}


def make_town_tables(**overrides) -> GameTables:
    kwargs = dict(
        links=[
            make_link("TRADITION_TOWN_TRADE", "MOD_TOWN_GOLD"),
            make_link("TRADITION_TOWN_TRADE", "MOD_CITY_SCIENCE"),
        ],
        modifiers=[
            make_modifier("MOD_TOWN_GOLD", subject="REQSET_TOWN", owner="REQSET_OWNER"),
            make_modifier("MOD_CITY_SCIENCE", subject="REQSET_CITY"),
        ],
        effect_types=[
            EffectTypeDefinition(
                modifier_type="MODTYPE_CITY_ADJUST_YIELD",
                collection_type="COLLECTION_PLAYER_CITIES",
                effect_type="EFFECT_CITY_ADJUST_YIELD",
            ),
        ],
        requirement_sets=[
            make_requirement_set("REQSET_TOWN", [("REQ_CITY_IS_TOWN", "REQUIREMENT_CITY_IS_TOWN")]),
            make_requirement_set("REQSET_CITY", [("REQ_CITY_IS_CAPITAL", "REQUIREMENT_CITY_IS_CAPITAL")]),
            make_requirement_set("REQSET_OWNER", []),
        ],
        requirement_arguments=[
            RequirementArgument(requirement_id="REQ_CITY_IS_TOWN", name="Amount", value=1),
        ],
        modifier_arguments=[
            make_tooltip("MOD_TOWN_GOLD", "LOC_BONUS_GOLD"),
            ModifierArgument(modifier_id="MOD_TOWN_GOLD", name="YieldType", value="YIELD_GOLD"),
            ModifierArgument(modifier_id="MOD_TOWN_GOLD", name="Amount", value=2),
        ],
        modifier_strings=[
            ModifierDisplayString(
                modifier_id="MOD_TOWN_GOLD",
                context="Description",
                text="LOC_MOD_TOWN_GOLD_DESCRIPTION",
            ),
        ],
    )
    kwargs.update(overrides)
    return make_tables(**kwargs)


def make_town_snapshot_data() -> dict:
    """Raw snapshot mapping for the town scenario, in host key casing."""
    return {
        "schema_version": SCHEMA_VERSION,
        "active_rules": [
            {"TraditionType": "TRADITION_TOWN_TRADE", "Name": "LOC_TRADITION_TOWN_TRADE_NAME"},
        ],
        "tables": {
            "TraditionModifiers": [
                {"TraditionType": "TRADITION_TOWN_TRADE", "ModifierId": "MOD_TOWN_GOLD"},
                {"TraditionType": "TRADITION_TOWN_TRADE", "ModifierID": "MOD_CITY_SCIENCE"},
            ],
            "Modifiers": [
                {
                    "ModifierId": "MOD_TOWN_GOLD",
                    "ModifierType": "MODTYPE_CITY_ADJUST_YIELD",
                    "SubjectRequirementSetId": "REQSET_TOWN",
                },
                {
                    "ModifierID": "MOD_CITY_SCIENCE",
                    "ModifierType": "MODTYPE_CITY_ADJUST_YIELD",
                    "SubjectRequirementSetId": "REQSET_CITY",
                },
            ],
            "DynamicModifiers": [
                {
                    "ModifierType": "MODTYPE_CITY_ADJUST_YIELD",
                    "CollectionType": "COLLECTION_PLAYER_CITIES",
                    "EffectType": "EFFECT_CITY_ADJUST_YIELD",
                },
            ],
            "RequirementSets": [
                {"RequirementSetId": "REQSET_TOWN", "RequirementSetType": "REQUIREMENTSET_TEST_ALL"},
                {"RequirementSetId": "REQSET_CITY", "RequirementSetType": "REQUIREMENTSET_TEST_ALL"},
            ],
            "RequirementSetRequirements": [
                {"RequirementSetId": "REQSET_TOWN", "RequirementId": "REQ_CITY_IS_TOWN"},
                {"RequirementSetId": "REQSET_CITY", "requirementId": "REQ_CITY_IS_CAPITAL"},
            ],
            "Requirements": [
                {"RequirementId": "REQ_CITY_IS_TOWN", "RequirementType": "REQUIREMENT_CITY_IS_TOWN"},
                {"requirementId": "REQ_CITY_IS_CAPITAL", "RequirementType": "REQUIREMENT_CITY_IS_CAPITAL"},
            ],
            "RequirementArguments": [],
            "ModifierArguments": [
                {"ModifierId": "MOD_TOWN_GOLD", "Name": "Tooltip", "Value": "LOC_BONUS_GOLD"},
            ],
            "ModifierStrings": [
                {
                    "ModifierId": "MOD_TOWN_GOLD",
                    "Context": "Description",
                    "Text": "LOC_MOD_TOWN_GOLD_DESCRIPTION",
                },
            ],
        },
        "locale": dict(TOWN_LOCALE),
        "current_age": "AGE_EXPLORATION",
        "city_improvements": [
            {"FreeConstructibleType": "IMPROVEMENT_FARM", "ConstructibleType": "IMPROVEMENT_FARM"},
            {"FreeConstructibleType": "IMPROVEMENT_FARM", "ConstructibleType": "IMPROVEMENT_FARM"},
            {"FreeConstructibleType": "IMPROVEMENT_PASTURE", "ConstructibleType": "IMPROVEMENT_PASTURE"},
            {"FreeConstructibleType": "IMPROVEMENT_MINE", "ConstructibleType": "IMPROVEMENT_MINE_RESOURCE"},
        ],
    }


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def town_tables() -> GameTables:
    return make_town_tables()


@pytest.fixture
def town_locale() -> LocaleTable:
    return LocaleTable(TOWN_LOCALE)


@pytest.fixture
def town_rules() -> StaticRulesModel:
    return StaticRulesModel(rules=[make_rule("TRADITION_TOWN_TRADE")])


@pytest.fixture
def town_snapshot_data() -> dict:
    return make_town_snapshot_data()


@pytest.fixture
def snapshot_file(tmp_path, town_snapshot_data):
    """Town scenario written to a YAML file."""
    path = tmp_path / "snapshot.yaml"
    path.write_text(yaml.safe_dump(town_snapshot_data), encoding="utf-8")
    return path
