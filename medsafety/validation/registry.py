"""Rule registry for managing active safety rules."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .models import Alert, ItemContext, PrescriptionContext

ItemRule = Callable[[ItemContext], list[Alert]]
PrescriptionRule = Callable[[PrescriptionContext], list[Alert]]


class RuleRegistry:
    """Ordered collection of rules; registration order is evaluation order."""

    def __init__(self) -> None:
        self._item_rules: list[ItemRule] = []
        self._prescription_rules: list[PrescriptionRule] = []

    def register(self, rule: ItemRule) -> None:
        if rule not in self._item_rules:
            self._item_rules.append(rule)

    def extend(self, rules: Iterable[ItemRule]) -> None:
        for rule in rules:
            self.register(rule)

    def register_prescription_rule(self, rule: PrescriptionRule) -> None:
        if rule not in self._prescription_rules:
            self._prescription_rules.append(rule)

    def item_rules(self) -> tuple[ItemRule, ...]:
        return tuple(self._item_rules)

    def prescription_rules(self) -> tuple[PrescriptionRule, ...]:
        return tuple(self._prescription_rules)

    def active_rules(self) -> tuple[Callable[..., list[Alert]], ...]:
        return self.item_rules() + self.prescription_rules()


default_registry = RuleRegistry()
