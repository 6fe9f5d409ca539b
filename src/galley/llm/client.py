"""LLM-backed equipment advisor."""
# mypy: ignore-errors

from __future__ import annotations

import json
import logging
import re
from typing import Optional, Sequence

import httpx

from galley.config import get_settings
from galley.llm.interface import AdvisorError, EquipmentAdvisor
from galley.llm.rule_based import RuleBasedEquipmentAdvisor
from galley.models.equipment import Equipment

_JSON_ARRAY_BLOCK_RE = re.compile(r"```(?:json)?\s*(\[.*?\])\s*```", re.DOTALL)

SYSTEM_PROMPT = (
    "You are a JSON-only kitchen equipment advisor. Respond with a single JSON array and "
    "nothing else: no markdown, no explanations."
)

MAINTENANCE_PROMPT = (
    "Generate a maintenance schedule for these kitchen equipment items.\n"
    "Equipment: {equipment_json}\n"
    "Cooking preferences: {preferences}\n\n"
    "Return a JSON array of objects with these properties:\n"
    "- equipmentId: number (matching the id in the equipment array)\n"
    "- nextMaintenanceDate: string (ISO date when maintenance should be performed)\n"
    "- recommendation: string\n"
    "- suggestedAction: string\n"
    "- priority: string (high, medium, or low)\n"
    "- tasks: string[] (specific maintenance tasks)"
)

RECOMMENDATION_PROMPT = (
    "Based on this kitchen equipment inventory and cooking preferences, recommend new "
    "equipment to purchase.\n"
    "Current equipment: {equipment_json}\n"
    "Cooking preferences: {preferences}\n"
    "Budget limit: {budget}\n\n"
    "Return a JSON array of objects with these properties:\n"
    "- name: string\n"
    "- category: string\n"
    "- reason: string\n"
    "- priority: string (high, medium, or low)\n"
    "- estimatedPrice: string (price range)\n"
    "- alternativeOptions: string[]"
)

logger = logging.getLogger(__name__)


class LLMEquipmentAdvisor:
    """Call an OpenAI/Ollama-compatible chat endpoint for maintenance and purchase advice."""

    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        provider: str,
        temperature: float,
        max_tokens: int,
        timeout: float = 30.0,
        api_key: Optional[str] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._provider = (provider or "openai").strip().lower()
        self._temperature = max(0.0, float(temperature))
        self._max_tokens = max(1, int(max_tokens))
        self._timeout = timeout
        self._api_key = api_key

    def generate_maintenance_schedule(
        self, equipment: Sequence[Equipment], preferences: Sequence[str] = ()
    ) -> list[object]:
        prompt = MAINTENANCE_PROMPT.format(
            equipment_json=_equipment_json(equipment),
            preferences=", ".join(preferences) or "None specified",
        )
        entries = self._request_array(prompt)
        return [_coerce_maintenance_entry(entry) for entry in entries]

    def generate_equipment_recommendations(
        self,
        equipment: Sequence[Equipment],
        preferences: Sequence[str] = (),
        budget: Optional[float] = None,
    ) -> list[object]:
        prompt = RECOMMENDATION_PROMPT.format(
            equipment_json=_equipment_json(equipment),
            preferences=", ".join(preferences) or "None specified",
            budget=f"${budget:g}" if budget is not None else "No specific budget",
        )
        entries = self._request_array(prompt)
        return [_coerce_recommendation_entry(entry) for entry in entries]

    def _request_array(self, prompt: str) -> list[object]:
        content = self._execute_chat(prompt)
        blob = extract_json_array(content)
        try:
            parsed = json.loads(blob)
        except json.JSONDecodeError as exc:
            snippet = blob.strip().replace("\n", " ")[:200]
            raise AdvisorError(f"Advisor returned invalid JSON: {exc}: payload={snippet}") from exc
        if not isinstance(parsed, list):
            raise AdvisorError(f"Advisor returned {type(parsed).__name__}, expected a JSON array")
        return parsed

    def _execute_chat(self, prompt: str) -> str:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}

        if self._provider == "ollama":
            endpoint = self._base_url
            if not endpoint.endswith("/api/chat"):
                endpoint = f"{endpoint}/api/chat"
            payload = {
                "model": self._model,
                "messages": messages,
                "stream": False,
                "options": {
                    "temperature": self._temperature,
                    "num_predict": self._max_tokens,
                },
            }
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(endpoint, json=payload, headers=headers)
            response.raise_for_status()
            message = response.json().get("message") or {}
            content = (message.get("content") or "").strip()
            if not content:
                raise AdvisorError("Ollama advisor response did not include content.")
            return content

        endpoint = self._base_url
        if not endpoint.endswith("/chat/completions"):
            endpoint = f"{endpoint}/chat/completions"
        payload = {
            "model": self._model,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "messages": messages,
        }
        with httpx.Client(timeout=self._timeout) as client:
            response = client.post(endpoint, json=payload, headers=headers)
        response.raise_for_status()
        choices = response.json().get("choices") or []
        if not choices:
            raise AdvisorError("Advisor returned no choices.")
        message = choices[0].get("message") or {}
        content = (message.get("content") or "").strip()
        if not content:
            raise AdvisorError("Advisor returned an empty response.")
        return content


def _equipment_json(equipment: Sequence[Equipment]) -> str:
    return json.dumps(
        [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in equipment],
        ensure_ascii=False,
    )


def extract_json_array(text: str) -> str:
    """Return the JSON array substring from raw LLM text."""

    match = _JSON_ARRAY_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()

    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end != -1 and end > start:
        return text[start : end + 1].strip()
    return text.strip()


def _coerce_maintenance_entry(entry: object) -> object:
    if not isinstance(entry, dict):
        return entry
    coerced = dict(entry)
    if "nextMaintenanceDate" not in coerced and "date" in coerced:
        coerced["nextMaintenanceDate"] = coerced.pop("date")
    tasks = coerced.get("tasks")
    if tasks is not None and not isinstance(tasks, list):
        coerced["tasks"] = [str(tasks)]
    return coerced


def _coerce_recommendation_entry(entry: object) -> object:
    if not isinstance(entry, dict):
        return entry
    coerced = dict(entry)
    if "estimatedPrice" not in coerced and "estimatedCost" in coerced:
        coerced["estimatedPrice"] = coerced.pop("estimatedCost")
    price = coerced.get("estimatedPrice")
    if isinstance(price, (int, float)):
        coerced["estimatedPrice"] = f"${price:g}"
    # Advisor-supplied ids are positional; the merger derives stable ones.
    coerced.pop("id", None)
    return coerced


def build_equipment_advisor() -> EquipmentAdvisor:
    """Return the LLM advisor when an endpoint is configured, else the rule-based one."""

    settings = get_settings()
    if not settings.advisor_llm_base_url:
        logger.debug("No advisor LLM configured; using rule-based advisor.")
        return RuleBasedEquipmentAdvisor()

    return LLMEquipmentAdvisor(
        base_url=settings.advisor_llm_base_url,
        model=settings.advisor_llm_model,
        provider=settings.advisor_llm_provider,
        temperature=settings.advisor_llm_temperature,
        max_tokens=settings.advisor_llm_max_tokens,
        timeout=settings.advisor_llm_timeout,
        api_key=settings.advisor_llm_api_key,
    )


__all__ = ["LLMEquipmentAdvisor", "build_equipment_advisor", "extract_json_array"]
