import pytest
from pydantic import ValidationError

from camo.core.exceptions import DuplicatePolicy
from camo.models.export_config import ExportConfig


def test_defaults():
    cfg = ExportConfig.model_validate({"modules": ["camo.shapes.tagging"]})

    assert cfg.name == "camo-export"
    assert cfg.backend == "typescript"
    assert cfg.duplicate_policy is DuplicatePolicy.FAIL
    assert cfg.export_all is False
    assert cfg.output is None
    assert cfg.log_level == "INFO"


def test_requires_modules_or_targets():
    with pytest.raises(ValidationError) as exc:
        ExportConfig.model_validate({"name": "empty"})

    assert "modules or targets" in str(exc.value)


def test_targets_must_name_module_and_attribute():
    cfg = ExportConfig.model_validate({"targets": ["camo.shapes.records:Bar"]})
    assert cfg.targets == ["camo.shapes.records:Bar"]

    with pytest.raises(ValidationError, match="package.module:Name"):
        ExportConfig.model_validate({"targets": ["camo.shapes.records.Bar"]})


def test_duplicate_policy_from_string():
    cfg = ExportConfig.model_validate({"modules": ["m"], "duplicate_policy": "skip"})

    assert cfg.duplicate_policy is DuplicatePolicy.SKIP

    with pytest.raises(ValidationError):
        ExportConfig.model_validate({"modules": ["m"], "duplicate_policy": "merge"})


def test_log_level_is_checked():
    with pytest.raises(ValidationError):
        ExportConfig.model_validate({"modules": ["m"], "log_level": "LOUD"})
