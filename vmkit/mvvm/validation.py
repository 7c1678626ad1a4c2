"""
ViewModel Validation.

Validation rules live in a pydantic model (the `schema`); the validator
reads the matching attributes from the ViewModel, runs the model
validation and keeps the failures grouped by property so views can show
errors per field or for the whole form.

Provides:
- ValidationFailure: One failed rule
- ViewModelValidator: Validator bound to a single ViewModel
- CompositeValidator: Several validators seen as one

Usage:
    class ProfileRules(BaseModel):
        name: str = Field(min_length=1)
        age: int = Field(ge=0)

    class ProfileValidator(ViewModelValidator):
        schema = ProfileRules

    validator = ProfileValidator(vm)
    if not validator.validate():
        print(validator.get_all_errors_in_string())
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Type

from loguru import logger
from pydantic import BaseModel, ValidationError

from vmkit.core.events import Signal
from vmkit.mvvm.bindable import BindableBase


@dataclass(frozen=True)
class ValidationFailure:
    property_name: str
    message: str
    error_type: str = "value_error"

    def __str__(self) -> str:
        return self.message


class ViewModelValidator:
    """
    Validator for a ViewModel backed by a pydantic model.

    The ViewModel's `property_changed` notifications trigger validation of
    the changed property when the schema declares it, so error state
    follows user input without explicit calls.

    Attributes:
        schema: pydantic model holding the rules
        errors_changed: Signal(property_name or None for whole validation)
    """

    schema: Optional[Type[BaseModel]] = None

    def __init__(self, view_model: BindableBase, schema: Optional[Type[BaseModel]] = None):
        if schema is not None:
            self.schema = schema
        if self.schema is None:
            raise ValueError(f"{self.__class__.__name__} has no schema")

        self._view_model = view_model
        self._errors: Optional[Dict[str, List[ValidationFailure]]] = None
        self._has_errors = False
        self.errors_changed = Signal("errors_changed")
        self._subscription = view_model.property_changed.connect(self._on_view_model_property_changed)

    @property
    def has_errors(self) -> bool:
        return self._has_errors

    @property
    def fields(self) -> List[str]:
        return list(self.schema.model_fields)

    # --- Validation ---

    def validate(self) -> bool:
        """
        Run all rules and replace the error state.

        Returns:
            True if there were no validation errors
        """
        failures = self._run()
        self._has_errors = bool(failures)
        if not failures:
            self._errors = None
        else:
            grouped: Dict[str, List[ValidationFailure]] = {}
            for failure in failures:
                grouped.setdefault(failure.property_name, []).append(failure)
            self._errors = grouped
            logger.debug(f"{self.__class__.__name__}: {len(failures)} validation errors")

        self.errors_changed.emit(None)
        return not failures

    def validate_property(self, property_name: str) -> bool:
        """
        Run the rules of one property and update only its error state.

        Returns:
            True if the property has no validation errors
        """
        failures = [f for f in self._run() if f.property_name == property_name]
        if not failures:
            if self._errors and property_name in self._errors:
                del self._errors[property_name]
        else:
            self._errors = self._errors or {}
            self._errors[property_name] = failures

        self._has_errors = bool(self._errors)
        self.errors_changed.emit(property_name)
        return not failures

    async def validate_async(self) -> bool:
        return self.validate()

    async def validate_property_async(self, property_name: str) -> bool:
        return self.validate_property(property_name)

    def should_validate(self, property_name: str) -> bool:
        return property_name in self.schema.model_fields

    def _values(self) -> Dict[str, Any]:
        return {
            name: getattr(self._view_model, name)
            for name in self.schema.model_fields
            if hasattr(self._view_model, name)
        }

    def _run(self) -> List[ValidationFailure]:
        try:
            self.schema.model_validate(self._values())
        except ValidationError as e:
            return [
                ValidationFailure(
                    property_name=str(error["loc"][0]) if error.get("loc") else "",
                    message=error["msg"],
                    error_type=error["type"],
                )
                for error in e.errors()
            ]
        return []

    def _on_view_model_property_changed(self, property_name: str, value: Any = None) -> None:
        if self.should_validate(property_name):
            self.validate_property(property_name)

    # --- Error access ---

    def get_errors(self, property_name: str) -> Optional[List[ValidationFailure]]:
        """Failures of one property from the last validation, or None."""
        if not self._errors:
            return None
        return self._errors.get(property_name)

    def get_all_errors(self, *property_names: str) -> Optional[List[ValidationFailure]]:
        """
        Failures of the given properties (all properties when none given)
        from the last validation, or None when nothing was validated as failing.
        """
        if self._errors is None:
            return None
        return [
            failure
            for name, failures in self._errors.items()
            if not property_names or name in property_names
            for failure in failures
        ]

    def get_all_errors_in_string(self) -> Optional[List[str]]:
        if not self._errors:
            return None
        return [failure.message for failures in self._errors.values() for failure in failures]

    def get_errors_in_string(self, property_name: str) -> Optional[List[str]]:
        failures = self.get_errors(property_name)
        if failures is None:
            return None
        return [failure.message for failure in failures]

    def dispose(self) -> None:
        self._subscription.dispose()


class CompositeValidator:
    """
    Composite of several validators.

    Complex ViewModels can split rules into separate validators and still
    track the validation state through a single object. Validators are
    fixed at construction.
    """

    def __init__(self, validators: Optional[Iterable[ViewModelValidator]] = None):
        self._validators: List[ViewModelValidator] = list(validators or [])
        self.errors_changed = Signal("errors_changed")
        for validator in self._validators:
            validator.errors_changed.connect(self.errors_changed.emit)

    @property
    def validators(self) -> List[ViewModelValidator]:
        return list(self._validators)

    @property
    def has_errors(self) -> bool:
        return any(validator.has_errors for validator in self._validators)

    def validate(self) -> bool:
        for validator in self._validators:
            validator.validate()
        return not self.has_errors

    def validate_property(self, property_name: str) -> bool:
        result = True
        for validator in self._validators:
            result &= validator.validate_property(property_name)
        return result

    async def validate_async(self) -> bool:
        result = True
        for validator in self._validators:
            result &= await validator.validate_async()
        return result

    async def validate_property_async(self, property_name: str) -> bool:
        result = True
        for validator in self._validators:
            result &= await validator.validate_property_async(property_name)
        return result

    def should_validate(self, property_name: str) -> bool:
        return any(validator.should_validate(property_name) for validator in self._validators)

    def get_errors(self, property_name: str) -> List[ValidationFailure]:
        errors = []
        for validator in self._validators:
            errors.extend(validator.get_errors(property_name) or [])
        return errors

    def get_all_errors(self, *property_names: str) -> List[ValidationFailure]:
        errors = []
        for validator in self._validators:
            errors.extend(validator.get_all_errors(*property_names) or [])
        return errors

    def get_all_errors_in_string(self) -> List[str]:
        errors = []
        for validator in self._validators:
            errors.extend(validator.get_all_errors_in_string() or [])
        return errors

    def get_errors_in_string(self, property_name: str) -> List[str]:
        errors = []
        for validator in self._validators:
            errors.extend(validator.get_errors_in_string(property_name) or [])
        return errors

    def dispose(self) -> None:
        for validator in self._validators:
            validator.dispose()
