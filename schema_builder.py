"""
Output schemas for the generation backend.

Each operation declares the exact field set the model must populate. Field
descriptions are written as instructions to the model, and the required
subset is what the response normalizer enforces.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models import Operation


class FieldType(str, Enum):
    STRING = "STRING"
    STRING_ARRAY = "STRING_ARRAY"
    OBJECT = "OBJECT"


class SchemaField(BaseModel):
    """One named field of an output schema"""
    model_config = ConfigDict(frozen=True)

    name: str
    type: FieldType
    description: str
    required: bool = False
    properties: List["SchemaField"] = Field(default_factory=list)

    def to_response_schema(self) -> Dict[str, Any]:
        if self.type == FieldType.STRING_ARRAY:
            return {
                "type": "ARRAY",
                "items": {"type": "STRING"},
                "description": self.description,
            }
        if self.type == FieldType.OBJECT:
            return _object_schema(self.properties, self.description)
        return {"type": "STRING", "description": self.description}


class OutputSchema(BaseModel):
    """Declarative output shape for one operation"""
    model_config = ConfigDict(frozen=True)

    operation: Operation
    fields: List[SchemaField]

    @property
    def required_fields(self) -> List[str]:
        return [item.name for item in self.fields if item.required]

    @property
    def optional_fields(self) -> List[str]:
        return [item.name for item in self.fields if not item.required]

    def get_field(self, name: str) -> Optional[SchemaField]:
        for item in self.fields:
            if item.name == name:
                return item
        return None

    def to_response_schema(self) -> Dict[str, Any]:
        """Render in the OpenAPI-style dict accepted as ``response_schema``."""
        return _object_schema(self.fields)


def _object_schema(fields: List[SchemaField], description: Optional[str] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "OBJECT",
        "properties": {item.name: item.to_response_schema() for item in fields},
        "required": [item.name for item in fields if item.required],
    }
    if description:
        schema["description"] = description
    return schema


def _analysis_schema() -> OutputSchema:
    return OutputSchema(
        operation=Operation.ANALYSIS,
        fields=[
            SchemaField(
                name="summary",
                type=FieldType.STRING,
                required=True,
                description=(
                    "The main summary of the content. Must be detailed and include data points, "
                    "statistics, and emotional hooks."
                ),
            ),
            SchemaField(
                name="original_content",
                type=FieldType.STRING,
                required=True,
                description=(
                    "The FULL, VERBATIM transcript or article text. Do not summarize, shorten "
                    "or paraphrase this field."
                ),
            ),
            SchemaField(
                name="comments_summary",
                type=FieldType.STRING,
                description=(
                    "A summary of the comments/discussion, focusing on corrections and insightful "
                    "additions. Return 'N/A' if not requested or found."
                ),
            ),
        ],
    )


def _script_schema() -> OutputSchema:
    return OutputSchema(
        operation=Operation.SCRIPT,
        fields=[
            SchemaField(
                name="titles",
                type=FieldType.STRING_ARRAY,
                required=True,
                description="3-5 viral, clickable titles.",
            ),
            SchemaField(
                name="hook",
                type=FieldType.STRING,
                required=True,
                description="The opening 3-5 seconds of script, designed to grab attention immediately.",
            ),
            SchemaField(
                name="script_body",
                type=FieldType.STRING,
                required=True,
                description="The main content script, structured with visual cues in brackets [Visual: ...].",
            ),
            SchemaField(
                name="closing",
                type=FieldType.STRING,
                required=True,
                description="The outro and Call to Action (CTA).",
            ),
            SchemaField(
                name="description",
                type=FieldType.STRING,
                required=True,
                description="Optimized video description with hashtags.",
            ),
            SchemaField(
                name="strategy",
                type=FieldType.STRING,
                required=True,
                description="Explanation of why this script works (psychological hooks, retention strategy).",
            ),
            SchemaField(
                name="fact_check_report",
                type=FieldType.STRING,
                description=(
                    "If fact check enabled: a report on the accuracy of claims using search. "
                    "If disabled: 'N/A'."
                ),
            ),
            SchemaField(
                name="safety_report",
                type=FieldType.STRING,
                description=(
                    "If safety check enabled: a report on suitability/policy compliance. "
                    "If disabled: 'N/A'."
                ),
            ),
        ],
    )


def _image_schema() -> OutputSchema:
    # Image calls return inline image parts; only the caption text is schema-shaped.
    return OutputSchema(
        operation=Operation.IMAGE,
        fields=[
            SchemaField(
                name="caption",
                type=FieldType.STRING,
                description="A short, engaging caption for the image, suitable for social media.",
            ),
        ],
    )


_SCHEMA_FACTORIES = {
    Operation.ANALYSIS: _analysis_schema,
    Operation.SCRIPT: _script_schema,
    Operation.IMAGE: _image_schema,
}


def build_output_schema(operation: Operation) -> OutputSchema:
    """Return the output schema for an operation tag."""
    return _SCHEMA_FACTORIES[Operation(operation)]()
