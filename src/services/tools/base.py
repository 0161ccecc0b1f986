from typing import Dict, Any, Optional
from abc import ABC, abstractmethod

from src.utils.logger import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 250

_JSON_TYPES = {
    "string": str,
    "boolean": bool,
    "array": list,
    "object": dict,
}


class ToolInputError(ValueError):
    """Raised when tool arguments do not match the input schema."""


class ToolExecutionError(Exception):
    """Raised when a tool fails after its input was accepted."""


def limit_property(noun: str) -> Dict[str, Any]:
    """Schema for the shared ``limit`` argument."""
    return {
        "type": "integer",
        "minimum": 1,
        "maximum": MAX_PAGE_SIZE,
        "default": 10,
        "description": f"Maximum number of {noun} to return (default: 10)",
    }


def search_title_property(noun: str) -> Dict[str, Any]:
    """Schema for the shared ``searchTitle`` argument."""
    return {
        "type": "string",
        "description": f"Only return {noun} whose title contains this text",
    }


def id_property(resource: str) -> Dict[str, Any]:
    """Schema for a required Shopify GID argument."""
    return {
        "type": "string",
        "minLength": 1,
        "description": (
            f"The GID of the {resource.lower()} to fetch "
            f'(e.g., "gid://shopify/{resource}/1234567890")'
        ),
    }


class BaseTool(ABC):
    """Abstract base class for all tools."""

    #: Prefix put in front of every execution error message
    error_prefix: str = "Tool failed"

    def __init__(self, client=None):
        self._client = client

    def initialize(self, client) -> None:
        """Bind the shared Shopify GraphQL client."""
        self._client = client

    @property
    def client(self):
        if self._client is None:
            raise RuntimeError(f"Tool '{self.name}' has no GraphQL client")
        return self._client

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description."""
        pass

    @property
    @abstractmethod
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema for tool input."""
        pass

    @abstractmethod
    async def execute(self, args: Dict[str, Any]) -> Any:
        """Run the tool against validated arguments."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Return the dictionary representation of the tool."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema
        }

    def validate(self, input_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Validate input data against schema and fill in defaults.

        Args:
            input_data: Tool input parameters

        Returns:
            The accepted arguments, with defaults applied and unknown keys dropped

        Raises:
            ToolInputError: If validation fails
        """
        input_data = input_data or {}
        if not isinstance(input_data, dict):
            raise ToolInputError("Arguments must be an object")

        schema = self.input_schema
        properties = schema.get("properties", {})

        for field in schema.get("required", []):
            if input_data.get(field) is None:
                raise ToolInputError(f"Missing required field: {field}")

        args: Dict[str, Any] = {}
        for field, spec in properties.items():
            value = input_data.get(field)
            if value is None:
                if "default" in spec:
                    args[field] = spec["default"]
                continue
            args[field] = self._check_value(field, value, spec)

        return args

    def _check_value(self, field: str, value: Any, spec: Dict[str, Any]) -> Any:
        expected = spec.get("type")

        if expected in ("integer", "number"):
            # bool is an int subclass but never a valid count
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ToolInputError(f"{field} must be a number, got {value!r}")
            if expected == "integer":
                if isinstance(value, float) and not value.is_integer():
                    raise ToolInputError(f"{field} must be an integer, got {value}")
                value = int(value)
            if "minimum" in spec and value < spec["minimum"]:
                raise ToolInputError(
                    f"{field} must be between {spec['minimum']} and "
                    f"{spec.get('maximum')}, got {value}"
                )
            if "maximum" in spec and value > spec["maximum"]:
                raise ToolInputError(
                    f"{field} must be between {spec.get('minimum')} and "
                    f"{spec['maximum']}, got {value}"
                )
            return value

        python_type = _JSON_TYPES.get(expected)
        if python_type and not isinstance(value, python_type):
            raise ToolInputError(f"{field} must be of type {expected}")

        if expected == "string" and len(value) < spec.get("minLength", 0):
            raise ToolInputError(f"{field} cannot be empty")

        if "enum" in spec and value not in spec["enum"]:
            raise ToolInputError(
                f"Invalid {field}: {value}. Expected one of: {', '.join(spec['enum'])}"
            )

        if expected == "array":
            if len(value) < spec.get("minItems", 0):
                raise ToolInputError(f"{field} must not be empty")
            item_spec = spec.get("items", {})
            value = [self._check_value(field, item, item_spec) for item in value]

        return value

    async def run(self, input_data: Optional[Dict[str, Any]]) -> Any:
        """Validate, execute, and prefix any execution failure."""
        args = self.validate(input_data)
        try:
            return await self.execute(args)
        except Exception as e:
            logger.error("Tool execution failed", tool=self.name, error=str(e))
            raise ToolExecutionError(f"{self.error_prefix}: {e}") from e


def require_found(obj: Optional[Dict[str, Any]], resource: str, gid: str) -> Dict[str, Any]:
    """Raise when a by-ID lookup returned ``null``."""
    if not obj:
        raise ValueError(f"{resource} not found with ID: {gid}")
    return obj
