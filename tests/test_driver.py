from types import MappingProxyType

import pytest

from flagdriver import DriverOptions, InvalidDriverConfig, InvalidFlagResolver, driver


def test_driver_evaluates_config_object():
    result = driver(
        {
            "states": {"isNotRecorded": True, "isUploading": False, "isUploaded": False},
            "flags": {
                "isDisabled": ["isNotRecorded", "isUploading"],
                "text": {"isNotRecorded": "Demo Disabled", "isUploaded": "Download Demo"},
            },
        }
    )
    assert result == {"isDisabled": True, "text": "Demo Disabled"}


def test_driver_accepts_options_model():
    options = DriverOptions(states={"a": False, "b": True}, flags={"x": ["a", "b"]})
    assert driver(options) == {"x": True}


def test_driver_accepts_read_only_mapping():
    config = MappingProxyType({"states": {"a": True}, "flags": {"x": {"a": 1}}})
    assert driver(config) == {"x": 1}


@pytest.mark.parametrize(
    "config",
    [
        {"states": {"a": True}},
        {"flags": {}},
        {"states": {"a": True}, "flags": {}, "extra": 1},
        {"states": [True], "flags": {}},
        "states",
    ],
)
def test_driver_rejects_malformed_config(config):
    with pytest.raises(InvalidDriverConfig):
        driver(config)


def test_driver_propagates_resolver_errors():
    with pytest.raises(InvalidFlagResolver):
        driver({"states": {"a": True}, "flags": {"x": 3}})
