"""Unit tests for bound property snapshots."""

import dataclasses

import pytest

from speech_trigger.properties import BoundProperties, Credentials


def test_defaults() -> None:
    """Test snapshot defaults match an unconfigured control."""
    props = BoundProperties()

    assert props.text == ""
    assert props.state == "waiting"
    assert props.language == ""
    assert props.voice == ""
    assert props.auto_speak is False


def test_snapshot_is_frozen() -> None:
    """Test snapshots cannot be patched in place."""
    props = BoundProperties(text="Hello")

    with pytest.raises(dataclasses.FrozenInstanceError):
        props.text = "Goodbye"  # type: ignore[misc]


def test_from_mapping_host_names() -> None:
    """Test host parameter names map onto snapshot fields."""
    props = BoundProperties.from_mapping(
        {
            "text": "Hello",
            "state": "idle",
            "subscriptionKey": "abc123",
            "region": "eastus",
            "language": "en-US",
            "voice": "en-US-JennyNeural",
            "autoSpeak": True,
        }
    )

    assert props == BoundProperties(
        text="Hello",
        state="idle",
        subscription_key="abc123",
        region="eastus",
        language="en-US",
        voice="en-US-JennyNeural",
        auto_speak=True,
    )


def test_from_mapping_none_and_unknown_keys() -> None:
    """Test None values take defaults and unknown keys are ignored."""
    props = BoundProperties.from_mapping(
        {"text": None, "state": None, "autoSpeak": None, "width": 300, "region": "westus"}
    )

    assert props.text == ""
    assert props.state == "waiting"
    assert props.auto_speak is False
    assert props.region == "westus"


def test_from_mapping_field_names() -> None:
    """Test snake_case field names are accepted as well."""
    props = BoundProperties.from_mapping({"subscription_key": "k", "auto_speak": 1})

    assert props.subscription_key == "k"
    assert props.auto_speak is True


def test_equality_is_field_by_field() -> None:
    """Test two snapshots with identical values compare equal."""
    a = BoundProperties.from_mapping({"text": "Hi", "region": "westus"})
    b = BoundProperties(text="Hi", region="westus")

    assert a == b
    assert a != BoundProperties(text="Hi", region="eastus")


def test_with_outputs() -> None:
    """Test output fields are replaced on a copy."""
    props = BoundProperties(text="Hi", auto_speak=True)

    updated = props.with_outputs("speaking", False)

    assert updated.state == "speaking"
    assert updated.auto_speak is False
    assert updated.text == "Hi"
    assert props.auto_speak is True


def test_credentials() -> None:
    """Test credentials are derived from the snapshot."""
    props = BoundProperties(subscription_key="secret", region="westeurope")

    assert props.credentials == Credentials(subscription_key="secret", region="westeurope")


def test_repr_masks_subscription_key() -> None:
    """Test the subscription key never shows up in reprs."""
    props = BoundProperties(subscription_key="secret", region="westeurope")

    assert "secret" not in repr(props)
    assert "secret" not in repr(props.credentials)
