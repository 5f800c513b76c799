import math

import pytest
from pydantic import ValidationError as ModelValidationError

from app.config import PROJECT_ROOT
from app.errors import ValidationError
from app.models import PaymentInput
from app.services import PaymentCalculator, PaymentConfig


def quote(calculator=None, **kwargs):
    calculator = calculator or PaymentCalculator()
    params = {"experience": "0-1", "specialty": "other", "project_count": 0, "estimated_value": 0}
    params.update(kwargs)
    return calculator.compute_payment(PaymentInput(**params))


def test_worked_example_exposes_every_term():
    result = quote(experience="3-5", specialty="wedding", project_count=3, estimated_value=500)

    assert result.base_payment == 50
    assert result.specialty_bonus == 20
    assert result.project_bonus == 30
    assert result.value_bonus == 50
    assert result.experience_multiplier == 1.4
    assert result.final_payment == 210


def test_floor_case_pays_the_base_amount():
    result = quote()
    assert result.final_payment == 50
    assert result.project_bonus == 0
    assert result.value_bonus == 0


def test_bonuses_are_capped():
    result = quote(project_count=40, estimated_value=1_000_000)
    assert result.project_bonus == 50
    assert result.value_bonus == 100
    assert result.final_payment == 200


def test_rounds_half_up():
    # 50 + 0.5 value bonus
    assert quote(estimated_value=5).final_payment == 51


@pytest.mark.parametrize("experience", ["0-1", "1-3", "3-5", "5-10", "10+"])
@pytest.mark.parametrize("specialty", ["wedding", "music-video", "cinematic", "other"])
def test_same_input_gives_same_output(experience, specialty):
    first = quote(experience=experience, specialty=specialty, project_count=2, estimated_value=250)
    second = quote(experience=experience, specialty=specialty, project_count=2, estimated_value=250)
    assert first == second


def test_monotonic_in_project_count_and_value():
    by_count = [quote(experience="5-10", project_count=n).final_payment for n in range(0, 12)]
    assert by_count == sorted(by_count)
    assert by_count[5] == by_count[11]  # capped from 5 projects on

    by_value = [quote(experience="1-3", estimated_value=v).final_payment for v in range(0, 1300, 50)]
    assert by_value == sorted(by_value)
    assert by_value[-1] == quote(experience="1-3", estimated_value=1000).final_payment


def test_unknown_keys_fall_back_to_neutral_values_and_are_flagged():
    result = quote(experience="forever", specialty="underwater", project_count=1)

    assert result.experience_multiplier == 1.0
    assert result.specialty_bonus == 0
    assert result.final_payment == 60
    assert result.experience_recognized is False
    assert result.specialty_recognized is False


def test_strict_lookups_reject_unknown_keys():
    calculator = PaymentCalculator(PaymentConfig(strict_lookups=True))

    with pytest.raises(ValidationError) as excinfo:
        quote(calculator, experience="forever")
    assert excinfo.value.field == "experience"

    with pytest.raises(ValidationError) as excinfo:
        quote(calculator, specialty="underwater")
    assert excinfo.value.field == "specialty"


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"project_count": -1}, "projectCount"),
        ({"estimated_value": -0.01}, "estimatedValue"),
        ({"estimated_value": math.nan}, "estimatedValue"),
        ({"estimated_value": math.inf}, "estimatedValue"),
    ],
)
def test_rejects_negative_or_non_finite_numbers(kwargs, field):
    with pytest.raises(ValidationError) as excinfo:
        quote(**kwargs)
    assert excinfo.value.field == field


def test_project_count_must_be_whole():
    with pytest.raises(ModelValidationError):
        PaymentInput(experience="3-5", specialty="wedding", project_count=2.5)
    assert quote(project_count=2.0).project_bonus == 20


def test_shipped_config_matches_the_defaults():
    config = PaymentConfig.load(PROJECT_ROOT / "config" / "payments" / "config.yaml")
    assert config == PaymentConfig()


def test_config_from_yaml_overrides_tables(tmp_path):
    path = tmp_path / "payments.yaml"
    path.write_text(
        "base_payment: 80\n"
        "specialty_bonuses:\n"
        "  vlog: 12\n"
        "strict_lookups: true\n",
        encoding="utf-8",
    )
    config = PaymentConfig.load(path)

    assert config.base_payment == 80
    assert dict(config.specialty_bonuses) == {"vlog": 12}
    assert config.experience_multipliers["10+"] == 1.8
    assert config.strict_lookups is True
    assert quote(PaymentCalculator(config), specialty="vlog").final_payment == 92


def test_missing_config_file_gives_defaults(tmp_path):
    assert PaymentConfig.load(tmp_path / "absent.yaml") == PaymentConfig()


@pytest.mark.parametrize(
    "text",
    [
        "base_payment: lots\n",
        "value_bonus_cap: -5\n",
        "experience_multipliers: [1, 2]\n",
        "specialty_bonuses:\n  wedding: high\n",
        "strict_lookups: sometimes\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_config_is_rejected(tmp_path, text):
    path = tmp_path / "payments.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        PaymentConfig.load(path)
