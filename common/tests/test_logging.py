import json
import logging
import sys

from config.logging import JsonFormatter, SamplingFilter


def _record(msg, level=logging.INFO, **extra):
    record = logging.LogRecord("storefront.orders", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_merges_extras():
    payload = json.loads(JsonFormatter().format(_record("order.placed", event="order.placed", order_id=7)))
    assert payload["message"] == "order.placed"
    assert payload["event"] == "order.placed"
    assert payload["order_id"] == 7
    assert payload["level"] == "INFO"
    assert payload["name"] == "storefront.orders"
    assert payload["time"].endswith("Z")


def test_json_formatter_merges_dict_messages():
    payload = json.loads(JsonFormatter().format(_record({"action": "signin", "status": "failed"})))
    assert payload["action"] == "signin"
    assert payload["status"] == "failed"
    assert "message" not in payload


def test_json_formatter_stringifies_unserializable_extras_and_formats_exceptions():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record("order.place_failed", level=logging.ERROR, obj=object())
        record.exc_info = sys.exc_info()
    payload = json.loads(JsonFormatter().format(record))
    assert payload["obj"].startswith("<object object")
    assert "ValueError: boom" in payload["exc_info"]


def test_sampling_filter_rate_zero_drops_info_but_keeps_allowed_events():
    sampler = SamplingFilter(rate=0.0, levels=["INFO"], allow_events=["order.placed"])
    assert sampler.filter(_record("cart.item_added")) is False
    assert sampler.filter(_record("order.placed")) is True
    assert sampler.filter(_record("order.place_failed", level=logging.ERROR)) is True
    assert sampler.filter(_record({"action": "signin"})) is False


def test_sampling_filter_invalid_rate_defaults_to_keep_all():
    sampler = SamplingFilter(rate="not-a-number")
    assert sampler.filter(_record("cart.item_added")) is True
