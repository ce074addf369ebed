"""Rule metadata lookup, cached per rule key."""

from sonar_gate.domain.entities.rule import Rule
from sonar_gate.infrastructure.sonar.cache import AsyncLoadingCache
from sonar_gate.infrastructure.sonar.schemas import RuleShowResponse, WsRule
from sonar_gate.infrastructure.sonar.ws_client import SonarWsClient


def to_rule(rule: WsRule | None) -> Rule:
    if rule is None:
        return Rule()
    return Rule(
        key=rule.key,
        repo=rule.repo,
        name=rule.name,
        description=rule.md_desc,
        type=rule.type,
        debt_rem_fn_type=rule.debt_rem_fn_type,
        debt_rem_fn_base_effort=rule.rem_fn_base_effort,
    )


class RuleResolver:
    """Resolves rule keys like ``java:S1172`` to Rule metadata."""

    def __init__(self, ws: SonarWsClient) -> None:
        self._ws = ws
        self._rules: AsyncLoadingCache[str, Rule] = AsyncLoadingCache("rule")

    async def get_rule(self, rule_key: str) -> Rule:
        """Rule for ``rule_key``; an empty Rule when the server has no body for it."""
        return await self._rules.get(rule_key, lambda: self._show(rule_key))

    async def _show(self, rule_key: str) -> Rule:
        response = await self._ws.call("api/rules/show", {"key": rule_key}, RuleShowResponse)
        return to_rule(response.rule)
