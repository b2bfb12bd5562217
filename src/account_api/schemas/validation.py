"""Declarative request validation.

Learn: Each payload type carries a rule table — (field, kind, param)
entries — instead of validation tags on the model. validate() walks the
table and reports:

    (None, False)   nothing failed
    (error, False)  exactly one field failed; error has a readable message
    (error, True)   several fields failed; callers answer with a generic
                    "Invalid Payload" so they don't reveal which ones

Rules for one field are checked in order and stop at that field's first
failure, so "required" and "email" on an empty email count once.
Messages use the field's wire name; eqfield names the other field by
the rule's label when it has one.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

import structlog
from email_validator import EmailNotValidError, validate_email

logger = structlog.get_logger()


@dataclass(frozen=True)
class Rule:
    field: str
    kind: str
    param: Optional[str] = None
    # How messages name param; defaults to param itself
    label: Optional[str] = None


@dataclass(frozen=True)
class FieldError:
    field: str
    kind: str
    param: Optional[str] = None
    label: Optional[str] = None

    @property
    def message(self) -> str:
        template = MESSAGES.get(self.kind)
        if template is None:
            logger.warning("validation.unknown_rule", kind=self.kind, field=self.field)
            return f"{self.field} is Invalid"
        return template.format(field=self.field, param=self.label or self.param)

    def __str__(self) -> str:
        return self.message


MESSAGES = {
    "required": "{field} is required",
    "email": "{field} should be a valid email address",
    "eqfield": "{field} should be the same as {param}",
}


def _is_zero(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value is False


def _check_required(value: Any, payload: Mapping[str, Any], param) -> bool:
    return not _is_zero(value)


def _check_email(value: Any, payload: Mapping[str, Any], param) -> bool:
    if not isinstance(value, str):
        return False
    try:
        # Syntax only: special-use domains such as .test are accepted
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError:
        return False
    return True


def _check_eqfield(value: Any, payload: Mapping[str, Any], param) -> bool:
    return value == payload.get(param)


CHECKS: dict[str, Callable[[Any, Mapping[str, Any], Optional[str]], bool]] = {
    "required": _check_required,
    "email": _check_email,
    "eqfield": _check_eqfield,
}


def _evaluate(rule: Rule, payload: Mapping[str, Any]) -> bool:
    check = CHECKS.get(rule.kind)
    if check is None:
        # Unknown rule kinds never pass
        return False
    return check(payload.get(rule.field), payload, rule.param)


def validate(
    payload: Mapping[str, Any], rules: Iterable[Rule]
) -> tuple[Optional[FieldError], bool]:
    """Evaluate rules against a payload. See module docstring."""
    errors: list[FieldError] = []
    failed_fields: set[str] = set()
    for rule in rules:
        if rule.field in failed_fields:
            continue
        if not _evaluate(rule, payload):
            failed_fields.add(rule.field)
            errors.append(FieldError(rule.field, rule.kind, rule.param, rule.label))

    if not errors:
        return None, False
    if len(errors) > 1:
        logger.info("validation.multiple_failures", count=len(errors))
        return errors[0], True
    return errors[0], False
