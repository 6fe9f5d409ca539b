"""Advisor backends producing raw maintenance and recommendation candidates."""

from galley.llm.client import LLMEquipmentAdvisor, build_equipment_advisor
from galley.llm.interface import AdvisorError, AdvisorResult, EquipmentAdvisor, call_advisor
from galley.llm.rule_based import RuleBasedEquipmentAdvisor

__all__ = [
    "AdvisorError",
    "AdvisorResult",
    "EquipmentAdvisor",
    "LLMEquipmentAdvisor",
    "RuleBasedEquipmentAdvisor",
    "build_equipment_advisor",
    "call_advisor",
]
