import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from ..errors import BadArgument, DatabaseMCPError, SerializationError
from ..models import QueryResult, ToolArguments, ToolResponse
from ..session import DatabaseSession

logger = logging.getLogger(__name__)


def _jsonable(result: Any) -> Any:
    if isinstance(result, QueryResult):
        return result.to_jsonable()
    if isinstance(result, BaseModel):
        return result.model_dump()
    if isinstance(result, (list, tuple)):
        return [_jsonable(item) for item in result]
    return result


def describe_validation_error(error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "arguments"
        problems.append(f"{location}: {err['msg']}")
    return "; ".join(problems)


class DatabaseToolBase(ABC):
    arguments_model: Type[ToolArguments] = ToolArguments

    def __init__(self, session: DatabaseSession):
        self.session = session

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def execute(self, arguments: ToolArguments) -> Any:
        pass

    def decode_arguments(self, arguments: Optional[Mapping[str, Any]]) -> ToolArguments:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise BadArgument(f"{self.name} expects an object of arguments, got {type(arguments).__name__}")
        try:
            return self.arguments_model.model_validate(dict(arguments))
        except ValidationError as e:
            raise BadArgument(f"invalid arguments for {self.name}: {describe_validation_error(e)}") from e

    def run(self, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        try:
            decoded = self.decode_arguments(arguments)
            return self.format_result(self.execute(decoded))
        except Exception as e:
            return self.handle_error(e)

    def format_result(self, result: Any) -> ToolResponse:
        """Encode a result for the MCP response"""
        try:
            text = json.dumps(_jsonable(result), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(str(e)) from e
        return ToolResponse(text=text)

    def handle_error(self, error: Exception) -> ToolResponse:
        """Turn a failure into an error response carrying no partial data"""
        if isinstance(error, DatabaseMCPError):
            logger.warning(f"{self.name} failed: {error}")
            return ToolResponse(text=str(error), is_error=True)

        logger.exception(f"{self.name} raised an unexpected error")
        return ToolResponse(text=f"Unexpected error: {error}", is_error=True)
