import pytest
from unittest.mock import MagicMock

from vmkit.mvvm.bindable import BindableBase, BindableProperty, bindable_properties


class PersonViewModel(BindableBase):
    name = BindableProperty(default="")
    age = BindableProperty(default=0, coerce=lambda x: max(0, int(x)))
    tags = BindableProperty(default=None)


class EmployeeViewModel(PersonViewModel):
    title = BindableProperty(default="")


def test_default_values():
    vm = PersonViewModel()
    assert vm.name == ""
    assert vm.age == 0


def test_change_emits_property_changed():
    vm = PersonViewModel()
    observer = MagicMock()
    vm.property_changed.connect(observer)

    vm.name = "Alice"

    assert vm.name == "Alice"
    observer.assert_called_once_with("name", "Alice")


def test_same_value_does_not_emit():
    vm = PersonViewModel()
    vm.name = "Alice"
    observer = MagicMock()
    vm.property_changed.connect(observer)

    vm.name = "Alice"

    observer.assert_not_called()


def test_coerce_applied_before_compare():
    vm = PersonViewModel()
    observer = MagicMock()
    vm.property_changed.connect(observer)

    vm.age = "-5"

    assert vm.age == 0
    observer.assert_not_called()

    vm.age = "7"
    assert vm.age == 7
    observer.assert_called_once_with("age", 7)


def test_equal_new_collection_instance_still_emits():
    vm = PersonViewModel()
    first = ["a"]
    vm.tags = first
    observer = MagicMock()
    vm.property_changed.connect(observer)

    vm.tags = first
    observer.assert_not_called()

    second = ["a"]
    vm.tags = second
    observer.assert_called_once_with("tags", second)
    assert vm.tags is second


def test_instances_do_not_share_values():
    first, second = PersonViewModel(), PersonViewModel()
    first.name = "Alice"
    assert second.name == ""


def test_manual_notification():
    vm = PersonViewModel()
    observer = MagicMock()
    vm.property_changed.connect(observer)

    vm.notify_property_changed("computed", 42)

    observer.assert_called_once_with("computed", 42)


def test_descriptor_on_class_returns_itself():
    assert isinstance(PersonViewModel.name, BindableProperty)
    assert PersonViewModel.name.name == "name"


def test_bindable_properties_include_bases():
    assert bindable_properties(EmployeeViewModel) == ["name", "age", "tags", "title"]
