from typing import List

from pydantic import AnyUrl, EmailStr, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError


RULE_VIOLATIONS = "rule_violations"
URL_SCHEMES = {"http", "https", "ftp"}
MIN_PASSWORD_LENGTH = 6

_url_adapter = TypeAdapter(AnyUrl)
_email_adapter = TypeAdapter(EmailStr)


def is_url(value: str) -> bool:
    try:
        url = _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return url.scheme in URL_SCHEMES and bool(url.host)


def is_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def string_violations(value, label: str) -> List[str]:
    if value is None:
        return [f"{label} is required"]
    if not isinstance(value, str):
        return [f"{label} must be a string"]
    if value.strip() == "":
        return [f"{label} cannot be an empty string"]
    return []


def check(violations: List[str], value):
    # All messages for one field travel in a single error so they keep their order
    if violations:
        raise PydanticCustomError(
            RULE_VIOLATIONS, "; ".join(violations), {"messages": violations})
    return value


def check_required(value, label: str):
    return check(string_violations(value, label), value)


def check_optional(value, label: str):
    if value is None or isinstance(value, str):
        return value
    return check([f"{label} must be a string"], value)


def check_url(value, label: str = "Image URL"):
    violations = string_violations(value, label)
    if isinstance(value, str) and not is_url(value):
        violations.append("Wrong URL format")
    return check(violations, value)


def check_email(value, label: str = "Email"):
    violations = string_violations(value, label)
    if not violations and not is_email(value):
        violations.append("Wrong email format")
    return check(violations, value)


def check_password(value, label: str = "Password"):
    violations = string_violations(value, label)
    if not violations and len(value) < MIN_PASSWORD_LENGTH:
        violations.append(
            f"{label} must be at least {MIN_PASSWORD_LENGTH} characters")
    return check(violations, value)


def default_caption(title: str, image_url: str) -> str:
    return f"{title.upper()} {image_url}"
