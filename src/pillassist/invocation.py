"""
Invocation wrapper: the only bridge between validated input and the model.

    validate input -> render prompt -> run_prompt(prompt, output schema)
    -> reject None -> re-validate output -> typed result

Nothing is retried here; retry policy belongs to the capability.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Type, TypeVar

from pydantic import BaseModel

from .capability import ModelCapability
from .errors import CapabilityError, EmptyOutput, InvalidInput, OutputSchemaMismatch
from .validators import ValidationError, validate_model

logger = logging.getLogger(__name__)

Q = TypeVar("Q", bound=BaseModel)
R = TypeVar("R", bound=BaseModel)


@dataclass(frozen=True)
class GuidanceOperation(Generic[Q, R]):
    name: str
    input_schema: Type[Q]
    output_schema: Type[R]
    render: Callable[[Q], str]
    capability: ModelCapability

    def validate_input(self, raw_input: Any) -> Q:
        try:
            return validate_model(self.input_schema, raw_input)
        except ValidationError as e:
            raise InvalidInput(self.name, e) from e

    async def invoke(self, raw_input: Any) -> R:
        """
        Run the operation once.

        Raises:
            InvalidInput: input broke its contract (the model is not called)
            CapabilityError: the capability raised, including timeouts
            EmptyOutput: the capability returned nothing
            OutputSchemaMismatch: the returned value does not fit the output schema
        """
        query = self.validate_input(raw_input)
        prompt = self.render(query)

        logger.debug("Invoking %s", self.name)
        try:
            value = await self.capability.run_prompt(prompt, self.output_schema)
        except Exception as e:
            logger.warning("%s: capability failed: %s", self.name, e)
            raise CapabilityError(self.name, e) from e

        if value is None or (isinstance(value, (str, bytes)) and not value.strip()):
            logger.warning("%s: capability returned no output", self.name)
            raise EmptyOutput(self.name)

        try:
            return validate_model(self.output_schema, value)
        except ValidationError as e:
            logger.warning("%s: output does not match %s", self.name, self.output_schema.__name__)
            raise OutputSchemaMismatch(self.name, e) from e
