"""PromptFlow: a named, typed text-generation operation.

A flow validates its input, renders a prompt template, asks the generative
backend for output matching `output_model` and validates what comes back.
Each invocation is independent; the flow holds no per-call state.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.llm_factory import GenerativeBackend, get_generative_backend
from app.flows.errors import BackendError, GenerationError, ValidationError
from app.flows.template import render_template, template_variables
from app.models.schemas import SafetySetting
from app.utils.llm import parse_json_response

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


class PromptFlow(Generic[InputT, OutputT]):
    def __init__(
        self,
        name: str,
        input_model: Type[InputT],
        output_model: Type[OutputT],
        template: str,
        safety_settings: Optional[List[SafetySetting]] = None,
        backend: Optional[GenerativeBackend] = None,
    ):
        unknown = template_variables(template) - set(input_model.model_fields)
        if unknown:
            raise ValueError(f"Flow '{name}' template uses unknown fields: {sorted(unknown)}")

        self.name = name
        self.input_model = input_model
        self.output_model = output_model
        self.template = template
        self.safety_settings = list(safety_settings or [])
        self._required_output_keys = [
            field_name for field_name, field in output_model.model_fields.items() if field.is_required()
        ]
        self._backend = backend

    @property
    def backend(self) -> GenerativeBackend:
        if self._backend:
            return self._backend
        try:
            return get_generative_backend()
        except BackendError as e:
            e.flow_name = e.flow_name or self.name
            raise
        except Exception as e:
            raise BackendError(f"Could not create generative backend: {e}", flow_name=self.name) from e

    def validate_input(self, payload: Union[InputT, Dict[str, Any]]) -> InputT:
        if isinstance(payload, self.input_model):
            payload = payload.model_dump()
        try:
            return self.input_model.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid input for {self.name}: {e.error_count()} error(s)",
                flow_name=self.name,
                errors=e.errors(include_url=False, include_context=False),
            ) from e

    def render(self, payload: Union[InputT, Dict[str, Any]]) -> str:
        """Validate `payload` and return the prompt it would send, without calling the backend."""
        validated = self.validate_input(payload)
        return render_template(self.template, validated.model_dump())

    def parse_output(self, raw: Any) -> OutputT:
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            logger.warning(f"[{self.name}] backend returned no output")
            raise GenerationError(f"{self.name} produced no output", flow_name=self.name)

        data = raw
        if isinstance(raw, str):
            try:
                data = parse_json_response(raw, required_keys=self._required_output_keys)
            except ValueError as e:
                raise GenerationError(f"{self.name} returned malformed output: {e}", flow_name=self.name) from e

        try:
            return self.output_model.model_validate(data)
        except PydanticValidationError as e:
            raise GenerationError(
                f"{self.name} output does not match {self.output_model.__name__}: {e.error_count()} error(s)",
                flow_name=self.name,
            ) from e

    async def invoke(self, payload: Union[InputT, Dict[str, Any]]) -> OutputT:
        validated = self.validate_input(payload)
        prompt = render_template(self.template, validated.model_dump())
        logger.info(f"[{self.name}] invoking backend")
        logger.debug(f"[{self.name}] prompt length: {len(prompt)}")

        raw = await self.backend.submit(prompt, self.output_model, self.safety_settings or None)
        return self.parse_output(raw)

    async def __call__(self, payload: Union[InputT, Dict[str, Any]]) -> OutputT:
        return await self.invoke(payload)

    def __repr__(self) -> str:
        return f"PromptFlow(name={self.name!r})"
