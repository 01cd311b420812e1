"""
Validation for YAML prompt templates
"""

from typing import Any, Dict, List
from datetime import datetime

from pydantic import BaseModel, Field, ValidationError, field_validator
import yaml

from eureka.config import DEFAULT_ASSISTANT_TEMP


class PromptMetadata(BaseModel):
    """Metadata for a prompt template"""
    item_type: str = Field(..., description="Type of items discussed (e.g., 'startup pitch ideas')")
    temperature: float = Field(DEFAULT_ASSISTANT_TEMP, ge=0.0, le=2.0, description="Sampling temperature for the assistant")


class PromptSet(BaseModel):
    """Set of prompts used by the idea assistant"""
    system: str = Field(..., description="System instruction sent with every conversation")
    structure: str = Field(..., description="Prompt asking for a JSON idea record for a chosen title")


class PromptTemplate(BaseModel):
    """Complete prompt template structure"""
    name: str = Field(..., description="Human-readable name of the template")
    description: str = Field(..., description="Description of what this template is for")
    version: str = Field(..., description="Template version (semantic versioning)")
    author: str = Field(..., description="Template author")
    created_date: str = Field(..., description="Creation date (YYYY-MM-DD)")

    metadata: PromptMetadata = Field(..., description="Template metadata")
    prompts: PromptSet = Field(..., description="Set of prompts")

    @field_validator('version')
    @classmethod
    def validate_version(cls, v):
        """Validate semantic versioning format"""
        parts = v.split('.')
        if len(parts) != 3:
            raise ValueError('Version must be in format X.Y.Z')
        for part in parts:
            if not part.isdigit():
                raise ValueError('Version parts must be numeric')
        return v

    @field_validator('created_date')
    @classmethod
    def validate_date(cls, v):
        """Validate date format"""
        try:
            datetime.strptime(v, '%Y-%m-%d')
            return v
        except ValueError:
            raise ValueError('Date must be in YYYY-MM-DD format')


class TemplateValidator:
    """Validates YAML prompt templates"""

    @staticmethod
    def load_and_validate(file_path: str) -> PromptTemplate:
        """Load and validate a YAML template file"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax: {e}")
        except FileNotFoundError:
            raise ValueError(f"Template file not found: {file_path}")

        return TemplateValidator.validate_dict(data)

    @staticmethod
    def validate_dict(data: Dict[str, Any]) -> PromptTemplate:
        """Validate a template from a dictionary"""
        if not isinstance(data, dict):
            raise ValueError("Template validation failed: top level must be a mapping")
        try:
            return PromptTemplate(**data)
        except ValidationError as e:
            raise ValueError(f"Template validation failed: {e}")

    @staticmethod
    def check_prompt_interpolation(template: PromptTemplate) -> List[str]:
        """Check for potential interpolation issues in prompts"""
        warnings = []

        if '{title}' not in template.prompts.structure:
            warnings.append("Structure prompt missing {title} placeholder")

        if '### Slide outline' not in template.prompts.system:
            warnings.append("System prompt does not ask for a '### Slide outline' section; deck export will fail")

        return warnings


def validate_template_file(file_path: str) -> tuple[PromptTemplate, List[str]]:
    """
    Validate a template file and return the template and any warnings

    Returns:
        tuple: (validated_template, list_of_warnings)
    """
    template = TemplateValidator.load_and_validate(file_path)
    warnings = TemplateValidator.check_prompt_interpolation(template)

    return template, warnings
