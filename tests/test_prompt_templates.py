"""
Tests for the assistant's YAML prompt templates
"""

import sys
from pathlib import Path

import pytest
import yaml

sys.path.insert(0, str(Path(__file__).parent.parent))

from eureka.prompts.loader import get_prompts, list_available_templates
from eureka.prompts.validation import TemplateValidator, validate_template_file


TEMPLATE_PATH = Path(__file__).parent.parent / "eureka" / "prompts" / "templates" / "eureka.yaml"


def load_template_dict():
    with open(TEMPLATE_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


def test_bundled_template_is_valid():
    template, warnings = validate_template_file(str(TEMPLATE_PATH))
    assert template.metadata.temperature == 0.6
    assert warnings == []


def test_prompts_expose_constants():
    prompts = get_prompts("eureka")
    assert prompts.ITEM_TYPE == "startup pitch ideas"
    assert "### Slide outline" in prompts.SYSTEM_PROMPT
    assert prompts.SYSTEM_PROMPT.startswith("You are the Eureka Idea Assistant")
    structure = prompts.structure_prompt("Compost")
    assert '"Compost"' in structure
    assert '"mvpTime": string' in structure
    assert "{{" not in structure


def test_unknown_template():
    with pytest.raises(ValueError, match="No prompts found"):
        get_prompts("does_not_exist")


@pytest.mark.parametrize("field, value, message", [
    ("version", "1.0", "X.Y.Z"),
    ("created_date", "30/08/2025", "YYYY-MM-DD"),
])
def test_invalid_metadata(field, value, message):
    data = load_template_dict()
    data[field] = value
    with pytest.raises(ValueError, match=message):
        TemplateValidator.validate_dict(data)


def test_missing_placeholder_warns():
    data = load_template_dict()
    data["prompts"]["structure"] = "Give me JSON"
    template = TemplateValidator.validate_dict(data)
    warnings = TemplateValidator.check_prompt_interpolation(template)
    assert warnings == ["Structure prompt missing {title} placeholder"]


def test_list_available_templates():
    templates = list_available_templates()
    assert templates["eureka"]["name"] == "Eureka Idea Assistant"
    assert templates["eureka"]["version"] == "1.0.0"
