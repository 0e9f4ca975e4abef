from typing import List

from langchain_core.prompts import ChatPromptTemplate

from ..models import Provider


RESOLVE_PROMPT = ChatPromptTemplate.from_messages([
    (
        "system",
        """
You help match waste items to a known material list. Given an item name and
labels, find the BEST match from the provider's materials.

Available materials for "{provider_name}":
{material_list}

Return STRICT JSON and nothing else:
{{
  "bestMaterialId": "material-id or null if no good match",
  "alternatives": [{{"materialId": "id", "score": 0.0}}],
  "resolveConfidence": 0.0,
  "reasoning": ["why this match"]
}}

RULES:
1. Only use material ids from the list above
2. Scores and resolveConfidence are floats between 0.0 and 1.0
3. Prefer null over guessing; only return bestMaterialId if reasonably confident
""",
    ),
    (
        "human",
        'Item: "{item_name}"\nLabels: {labels}',
    ),
])


def format_material_list(provider: Provider) -> str:
    """One line per material: `- id: Name (category)`."""
    return "\n".join(
        f"- {m.id}: {m.name} ({m.category.value})" for m in provider.materials
    )


def format_labels(labels: List[str]) -> str:
    return ", ".join(f'"{label}"' for label in labels) if labels else "none"
