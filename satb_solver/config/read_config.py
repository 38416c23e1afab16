import logging
import random
from dataclasses import fields
from pathlib import Path
from typing import Type, TypeVar, Union, get_args, get_origin, get_type_hints

import yaml

from satb_solver.pitch_utils.types import SettingsBase

LOGGER = logging.getLogger(__name__)


def get_attribute_type(dataclass_class: Type[SettingsBase], attr_name: str):
    type_hints = get_type_hints(dataclass_class)
    if attr_name not in type_hints:
        raise ValueError(f"{attr_name=} not among the fields of {dataclass_class=}")
    expected_type = type_hints[attr_name]
    # Optional[int] is randomized as int
    if get_origin(expected_type) is Union:
        non_none = [arg for arg in get_args(expected_type) if arg is not type(None)]
        if len(non_none) == 1:
            expected_type = non_none[0]
    return expected_type


def get_random_val(expected_type: Type, min_val, max_val):
    """
    >>> random.seed(42)
    >>> 2 <= get_random_val(int, 2, 5) <= 5
    True
    >>> get_random_val(str, "a", "b")
    Traceback (most recent call last):
    ValueError: expected_type=<class 'str'> not supported by get_random_val()
    """
    if expected_type is float:
        return min_val + random.random() * (max_val - min_val)
    if expected_type is int:
        return random.randint(min_val, max_val)

    raise ValueError(f"{expected_type=} not supported by get_random_val()")


S = TypeVar("S", bound=SettingsBase)


def _check_keys(settings_class: Type[SettingsBase], keys):
    field_names = {field.name for field in fields(settings_class)}
    for key in keys:
        if key not in field_names:
            raise ValueError(f"{key=} is not a setting of {settings_class.__name__}")


def load_config_from_yaml(settings_class: Type[S], yaml_path: str | Path | None) -> S:
    """Builds `settings_class` from a YAML file; with no file, the defaults.

    A setting can be given as a `MIN_`/`MAX_` pair instead of a single value, in
    which case a value is chosen at random from the (inclusive) range.
    """
    if yaml_path is None:
        return settings_class()
    with open(yaml_path, "r") as yaml_file:
        config_dict = yaml.safe_load(yaml_file) or {}

    max_range_keys = {}
    min_range_keys = {}
    other_keys = {}

    for key, val in config_dict.items():
        if key.startswith("MAX_"):
            max_range_keys[key] = val
        elif key.startswith("MIN_"):
            min_range_keys[key] = val
        else:
            other_keys[key] = val

    _check_keys(
        settings_class,
        list(other_keys)
        + [key[4:] for key in list(min_range_keys) + list(max_range_keys)],
    )

    for min_key in min_range_keys:
        base_key = min_key[4:]  # Remove "MIN_"
        if base_key in other_keys:
            raise ValueError(f"Found {min_key=} but also {base_key=}")
        max_key = "MAX_" + base_key
        if max_key not in max_range_keys:
            raise ValueError(f"Found {min_key=} but missing {max_key=}")

    for max_key, max_val in max_range_keys.items():
        base_key = max_key[4:]  # Remove "MAX_"
        if base_key in other_keys:
            raise ValueError(f"Found {max_key=} but also {base_key=}")
        min_key = "MIN_" + base_key
        if min_key not in min_range_keys:
            raise ValueError(f"Found {max_key=} but missing {min_key=}")

        min_val = min_range_keys[min_key]
        expected_type = get_attribute_type(settings_class, base_key)
        random_val = get_random_val(expected_type, min_val, max_val)
        LOGGER.debug(f"{base_key} = {random_val} (from {min_val} to {max_val})")
        other_keys[base_key] = random_val

    return settings_class(**other_keys)
