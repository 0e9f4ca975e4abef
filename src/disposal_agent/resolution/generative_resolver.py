"""
Boundary wrapper around the generative (LLM) material resolver.

The model is an untrusted collaborator: every call returns an explicit
ResolveSuccess or ResolveFailure and never raises for timeouts, transport
errors or malformed output. Callers branch on the result type.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Union

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import JsonOutputParser
from pydantic import ValidationError as SchemaValidationError

from ..models import Provider
from ..schemas import ResolveOutput
from ..security import InputValidator
from .prompts import RESOLVE_PROMPT, format_labels, format_material_list

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveSuccess:
    """Well-formed model output; ids are still unvalidated."""
    output: ResolveOutput


@dataclass(frozen=True)
class ResolveFailure:
    reason: str


ResolveAttempt = Union[ResolveSuccess, ResolveFailure]


class GenerativeResolver:
    """
    Asks a chat model to map an item onto one of a provider's material ids.

    Usage:
        resolver = GenerativeResolver(llm, timeout_seconds=10)
        attempt = await resolver.resolve(provider, "snickers wrapper", ["plastic"])
        if isinstance(attempt, ResolveSuccess):
            ...
    """

    def __init__(self, llm: Any, timeout_seconds: float = 10.0):
        """
        :param llm: LangChain chat model (any Runnable accepting prompt messages)
        :param timeout_seconds: Upper bound on one model call
        """
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")

        self.timeout_seconds = timeout_seconds
        self._chain = RESOLVE_PROMPT | llm | JsonOutputParser()

    async def resolve(
        self,
        provider: Provider,
        guessed_item_name: str,
        labels: List[str],
    ) -> ResolveAttempt:
        """
        Run one bounded model call.

        :param provider: Catalog whose materials the model may choose from
        :param guessed_item_name: Primary item description
        :param labels: Extra vision labels; unsafe ones are dropped
        :return: ResolveSuccess with a schema-valid payload, else ResolveFailure
        """
        safe_labels = [label for label in labels if label and InputValidator.is_safe_for_model(label)]
        inputs = {
            "provider_name": provider.display_name,
            "material_list": format_material_list(provider),
            "item_name": guessed_item_name,
            "labels": format_labels(safe_labels),
        }

        try:
            raw = await asyncio.wait_for(self._chain.ainvoke(inputs), timeout=self.timeout_seconds)
            output = ResolveOutput.model_validate(raw)
        except asyncio.TimeoutError:
            logger.warning(
                f"Generative resolve timed out after {self.timeout_seconds}s "
                f"for '{guessed_item_name}'"
            )
            return ResolveFailure(reason=f"timed out after {self.timeout_seconds}s")
        except (OutputParserException, SchemaValidationError) as e:
            logger.warning(f"Generative resolve returned malformed output: {e}")
            return ResolveFailure(reason="malformed response")
        except Exception as e:
            # Transport and provider SDK errors have no common base class
            logger.warning(f"Generative resolve failed: {type(e).__name__}: {e}")
            return ResolveFailure(reason=f"{type(e).__name__}")

        logger.info(
            f"Generative resolve for '{guessed_item_name}': "
            f"best={output.best_material_id}, confidence={output.resolve_confidence}"
        )
        return ResolveSuccess(output=output)
