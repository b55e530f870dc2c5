from typing import Any, Self, get_args, get_origin
from dataclasses import asdict, fields
import inspect
import yaml


def remove_empty(x: Any) -> Any:
    """Recursively drop None values and empty collections from dicts and lists."""
    if isinstance(x, dict):
        cleaned = {k: remove_empty(v) for k, v in x.items()}
        return {k: v for k, v in cleaned.items() if v is not None and v != {} and v != []}
    elif isinstance(x, list):
        return [remove_empty(e) for e in x]
    else:
        return x


class YamlData():
    def to_yaml(self, skip_empty: bool = False) -> str:
        self_dict = asdict(self)
        if skip_empty:
            self_dict = remove_empty(self_dict)
        self_yaml = yaml.safe_dump(self_dict, sort_keys=False)
        return self_yaml

    @classmethod
    def from_yaml(cls, instance_yaml) -> Self:
        instance_dict = yaml.safe_load(instance_yaml)
        instance = cls.from_dict(instance_dict)
        return instance

    @classmethod
    def from_dict(cls, instance_dict) -> Self:
        constructor_params = inspect.signature(cls).parameters
        sanitized_dict = {k: v for k, v in instance_dict.items() if k in constructor_params}
        instance = cls(**sanitized_dict)

        # The instance itself is now a YamlData subclass, but nested YamlData fields may still be dicts.
        instance.bless_yaml_data_fields()
        return instance

    def bless_yaml_data_fields(self):
        for field in fields(self):
            field_value = getattr(self, field.name)
            if is_yaml_data_type(field.type) and isinstance(field_value, dict):
                # "Bless" the dict into an instance of the declared YamlData subclass.
                setattr(self, field.name, field.type.from_dict(field_value))
            elif get_origin(field.type) is list and isinstance(field_value, list):
                # Same for lists declared as list[SomeYamlData].
                element_types = get_args(field.type)
                if element_types and is_yaml_data_type(element_types[0]):
                    element_type = element_types[0]
                    blessed = [element_type.from_dict(e) if isinstance(e, dict) else e for e in field_value]
                    setattr(self, field.name, blessed)


def is_yaml_data_type(declared_type: Any) -> bool:
    if get_origin(declared_type) is not None:
        return False
    return isinstance(declared_type, type) and issubclass(declared_type, YamlData)
