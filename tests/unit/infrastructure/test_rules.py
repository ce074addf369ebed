"""Tests for RuleResolver."""

import httpx
import pytest

from sonar_gate.domain.entities.rule import Rule, RuleType
from sonar_gate.infrastructure.sonar.errors import CacheLoadError, HttpError
from sonar_gate.infrastructure.sonar.rules import RuleResolver

RULE = {
    "rule": {
        "key": "java:S1172",
        "repo": "java",
        "name": "Unused method parameters should be removed",
        "mdDesc": "Unused parameters are misleading.",
        "severity": "MAJOR",
        "type": "CODE_SMELL",
        "debtRemFnType": "CONSTANT_ISSUE",
        "remFnBaseEffort": "5min",
    },
    "actives": [],
}


@pytest.fixture
def rules(ws):
    return RuleResolver(ws)


@pytest.mark.asyncio
async def test_get_rule_maps_fields(fake_sonar, rules):
    fake_sonar.route("api/rules/show", RULE)

    rule = await rules.get_rule("java:S1172")

    assert rule == Rule(
        key="java:S1172",
        repo="java",
        name="Unused method parameters should be removed",
        description="Unused parameters are misleading.",
        type=RuleType.CODE_SMELL,
        debt_rem_fn_type="CONSTANT_ISSUE",
        debt_rem_fn_base_effort="5min",
    )
    assert fake_sonar.calls("api/rules/show")[0].url.params["key"] == "java:S1172"


@pytest.mark.asyncio
async def test_rule_is_cached(fake_sonar, rules):
    fake_sonar.route("api/rules/show", RULE)

    first = await rules.get_rule("java:S1172")
    second = await rules.get_rule("java:S1172")

    assert first is second
    assert len(fake_sonar.calls("api/rules/show")) == 1


@pytest.mark.asyncio
async def test_missing_rule_body_gives_empty_rule(fake_sonar, rules):
    fake_sonar.route("api/rules/show", {"actives": []})

    rule = await rules.get_rule("java:S0000")

    assert rule == Rule()
    assert rule.key is None
    assert rule.type is None


@pytest.mark.asyncio
async def test_failure_wrapped_and_retried(fake_sonar, rules):
    fake_sonar.route("api/rules/show", lambda r: httpx.Response(500))

    with pytest.raises(CacheLoadError) as exc_info:
        await rules.get_rule("java:S1172")

    assert "java:S1172" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, HttpError)

    fake_sonar.route("api/rules/show", RULE)
    rule = await rules.get_rule("java:S1172")

    assert rule.key == "java:S1172"
    assert len(fake_sonar.calls("api/rules/show")) == 2
