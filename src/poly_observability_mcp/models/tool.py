# Tool domain models
# Typed parameter schemas, tool descriptors and MCP envelopes

import inspect
from typing import Annotated, Any, Awaitable, Callable, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    create_model,
    field_validator,
)

ToolHandler = Callable[[dict[str, Any]], Awaitable[Any]]


class _ParamBase(BaseModel):
    """Fields shared by every parameter variant."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    required: bool = False

    def annotation(self) -> Any:
        raise NotImplementedError

    def schema_fragment(self) -> dict[str, Any]:
        fragment: dict[str, Any] = {"type": self.type}  # type: ignore[attr-defined]
        if self.description:
            fragment["description"] = self.description
        return fragment


class StringParam(_ParamBase):
    type: Literal["string"] = "string"

    def annotation(self) -> Any:
        return StrictStr


class NumberParam(_ParamBase):
    type: Literal["number"] = "number"

    def annotation(self) -> Any:
        return Union[StrictInt, StrictFloat]


class IntegerParam(_ParamBase):
    type: Literal["integer"] = "integer"

    def annotation(self) -> Any:
        return StrictInt


class BooleanParam(_ParamBase):
    type: Literal["boolean"] = "boolean"

    def annotation(self) -> Any:
        return StrictBool


class EnumParam(_ParamBase):
    """A string parameter restricted to a fixed set of values."""

    type: Literal["enum"] = "enum"
    values: tuple[Union[str, int, float, bool], ...] = Field(..., min_length=1)

    def annotation(self) -> Any:
        allowed = self.values

        def check(value: Any) -> Any:
            # Equality alone would let True through for 1 and 1.0 for 1
            if not any(type(value) is type(a) and value == a for a in allowed):
                raise ValueError(f"Input should be one of {', '.join(repr(a) for a in allowed)}")
            return value

        return Annotated[Any, AfterValidator(check)]

    def schema_fragment(self) -> dict[str, Any]:
        kinds = {type(v) for v in self.values}
        fragment: dict[str, Any] = {"enum": list(self.values)}
        if kinds == {str}:
            fragment["type"] = "string"
        if self.description:
            fragment["description"] = self.description
        return fragment


class ObjectParam(_ParamBase):
    type: Literal["object"] = "object"

    def annotation(self) -> Any:
        return dict[str, Any]


class ArrayParam(_ParamBase):
    type: Literal["array"] = "array"

    def annotation(self) -> Any:
        return list[Any]


class AnyParam(_ParamBase):
    """Untyped parameter, used for downstream schemas without a type."""

    type: Literal["any"] = "any"

    def annotation(self) -> Any:
        return Any

    def schema_fragment(self) -> dict[str, Any]:
        return {"description": self.description} if self.description else {}


ParamSpec = Annotated[
    Union[
        StringParam,
        NumberParam,
        IntegerParam,
        BooleanParam,
        EnumParam,
        ObjectParam,
        ArrayParam,
        AnyParam,
    ],
    Field(discriminator="type"),
]

_JSON_TYPES: dict[str, type[_ParamBase]] = {
    "string": StringParam,
    "number": NumberParam,
    "integer": IntegerParam,
    "boolean": BooleanParam,
    "object": ObjectParam,
    "array": ArrayParam,
}


def params_from_json_schema(schema: dict[str, Any] | None) -> dict[str, ParamSpec]:
    """Convert a JSON Schema object definition into typed parameters.

    Used for tools whose schema is only known at runtime (e.g. tools
    discovered on a downstream MCP server). Properties with an ``enum``
    become :class:`EnumParam`; unknown or union types fall back to
    :class:`AnyParam`.
    """
    if not schema:
        return {}

    required = set(schema.get("required") or [])
    params: dict[str, ParamSpec] = {}
    for name, prop in (schema.get("properties") or {}).items():
        prop = prop or {}
        description = prop.get("description", "")
        is_required = name in required
        if prop.get("enum"):
            params[name] = EnumParam(
                values=tuple(prop["enum"]),
                description=description,
                required=is_required,
            )
            continue
        json_type = prop.get("type")
        param_cls = _JSON_TYPES.get(json_type, AnyParam) if isinstance(json_type, str) else AnyParam
        params[name] = param_cls(description=description, required=is_required)
    return params


class ToolDescriptor(BaseModel):
    """A named, schema-described operation exposed by an adapter.

    The argument validator and JSON input schema are compiled once, when the
    descriptor is built, and reused for every call.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Unique tool name")
    description: str = Field(default="", description="Human readable description")
    params: dict[str, ParamSpec] = Field(default_factory=dict)
    handler: Callable[..., Any] = Field(..., exclude=True)
    timeout: Optional[float] = Field(
        default=None, gt=0, description="Per-call timeout override in seconds"
    )

    _validator: type[BaseModel] = PrivateAttr()
    _input_schema: dict[str, Any] = PrivateAttr()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure name is not blank."""
        if not v.strip():
            raise ValueError("Tool name cannot be empty")
        return v

    @field_validator("handler")
    @classmethod
    def validate_handler(cls, v: Any) -> Any:
        if not callable(v):
            raise ValueError("Tool handler must be callable")
        return v

    def model_post_init(self, __context: Any) -> None:
        fields: dict[str, Any] = {}
        for index, (param_name, spec) in enumerate(self.params.items()):
            annotation = spec.annotation()
            if spec.required:
                fields[f"p{index}"] = (annotation, Field(..., alias=param_name))
            else:
                fields[f"p{index}"] = (
                    Optional[annotation],
                    Field(default=None, alias=param_name),
                )
        self._validator = create_model(
            f"{self.name}_arguments",
            __config__=ConfigDict(extra="forbid", strict=True),
            **fields,
        )

        schema: dict[str, Any] = {
            "type": "object",
            "properties": {n: p.schema_fragment() for n, p in self.params.items()},
        }
        required = [n for n, p in self.params.items() if p.required]
        if required:
            schema["required"] = required
        self._input_schema = schema

    @property
    def input_schema(self) -> dict[str, Any]:
        return self._input_schema

    def validate_arguments(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Validate call arguments, returning only the supplied parameters.

        Raises:
            pydantic.ValidationError: If the arguments violate the schema
        """
        validated = self._validator.model_validate(arguments or {})
        return validated.model_dump(by_alias=True, exclude_unset=True)

    async def invoke(self, arguments: dict[str, Any]) -> Any:
        """Run the handler on already validated arguments."""
        result = self.handler(arguments)
        if inspect.isawaitable(result):
            result = await result
        return result

    def to_mcp(self) -> "MCPTool":
        return MCPTool(
            name=self.name, description=self.description, inputSchema=self.input_schema
        )


class MCPTool(BaseModel):
    """Tool definition in MCP protocol format."""

    name: str = Field(..., description="Tool name in MCP format")
    description: str = Field(..., description="Tool description for LLM consumption")
    inputSchema: dict[str, Any] = Field(  # noqa: N815
        ..., description="JSON Schema for tool inputs"
    )


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Uniform envelope returned for every tool call, success or failure."""

    content: list[TextContent]
    isError: bool = False  # noqa: N815

    @classmethod
    def from_text(cls, text: str, is_error: bool = False) -> "ToolResponse":
        return cls(content=[TextContent(text=text)], isError=is_error)

    @property
    def text(self) -> str:
        return "\n".join(item.text for item in self.content)


class ToolListResponse(BaseModel):
    tools: list[MCPTool]


class ToolCallRequest(BaseModel):
    """Call-by-name request as delivered by a transport."""

    name: str = Field(..., min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)
