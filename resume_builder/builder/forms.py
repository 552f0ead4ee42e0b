from dataclasses import asdict, dataclass
from typing import Dict, Optional

from . import validators
from .validators import validate_fields, validate_required


@dataclass
class RegistrationForm:
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    first_name: str = ""
    last_name: str = ""

    rules = {
        "username": validators.validate_username,
        "email": validators.validate_email,
        "password": validators.validate_password,
        "first_name": validators.validate_first_name,
        "last_name": validators.validate_last_name,
    }

    def blur(self, field_name: str) -> Optional[str]:
        """The message for one field, as shown when focus leaves it."""
        if field_name == "confirm_password":
            return validators.validate_confirm_password(self.password, self.confirm_password)
        rule = self.rules.get(field_name)
        return rule(getattr(self, field_name)) if rule else None

    def validate(self) -> Dict[str, str]:
        errors = validate_fields(asdict(self), self.rules)
        confirm_error = validators.validate_confirm_password(self.password, self.confirm_password)
        if confirm_error:
            errors["confirm_password"] = confirm_error
        return errors


@dataclass
class LoginForm:
    username: str = ""
    password: str = ""

    rules = {
        "username": validate_required("Username"),
        "password": validate_required("Password"),
    }

    def validate(self) -> Dict[str, str]:
        return validate_fields(asdict(self), self.rules)
