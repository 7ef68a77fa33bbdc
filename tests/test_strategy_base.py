"""
Unit tests for the shared call strategy state: adapters and logger.
"""

import logging

import pytest

from vstorage.log import DEFAULT_LOGGER_NAME
from vstorage.strategy.call_all import CallAllStrategy


class TestAdapterRegistration:
    """Test cases for adapter registration on a strategy."""

    def test_new_strategy_has_no_adapters(self):
        """Test a fresh strategy starts empty."""
        assert CallAllStrategy().get_adapters() == ()

    def test_registration_order_is_preserved(self, adapter_factory):
        """Test adapters keep the order in which they were added."""
        a, b, c = adapter_factory("A"), adapter_factory("B"), adapter_factory("C")
        strategy = CallAllStrategy()

        strategy.add_adapters([a, b])
        strategy.add_adapters([c])

        assert strategy.get_adapters() == (a, b, c)

    def test_duplicates_are_kept(self, adapter_factory):
        """Test the same adapter can be registered twice."""
        a = adapter_factory("A")
        strategy = CallAllStrategy()

        strategy.add_adapters([a, a])

        assert strategy.get_adapters() == (a, a)

    def test_get_adapters_is_stable(self, adapter_factory):
        """Test repeated reads without additions return equal sequences."""
        strategy = CallAllStrategy()
        strategy.add_adapters([adapter_factory("A"), adapter_factory("B")])

        assert strategy.get_adapters() == strategy.get_adapters()

    def test_get_adapters_is_read_only(self, adapter_factory):
        """Test the returned view cannot change the registry."""
        strategy = CallAllStrategy()
        strategy.add_adapters([adapter_factory("A")])

        adapters = strategy.get_adapters()
        with pytest.raises(AttributeError):
            adapters.append(adapter_factory("B"))
        assert len(strategy.get_adapters()) == 1

    def test_add_adapters_accepts_generators(self, adapter_factory):
        """Test any iterable of adapters can be registered."""
        strategy = CallAllStrategy()
        strategy.add_adapters(adapter_factory(name) for name in "XYZ")

        assert [a.get_name() for a in strategy.get_adapters()] == ["X", "Y", "Z"]


class TestStrategyLogging:
    """Test cases for the strategy logger and logging helper."""

    def test_default_logger_is_used_when_unset(self):
        """Test a strategy without a logger falls back to the package logger."""
        strategy = CallAllStrategy()
        assert strategy.get_logger() is logging.getLogger(DEFAULT_LOGGER_NAME)

    def test_set_logger_replaces_default(self):
        """Test an injected logger is used."""
        custom = logging.getLogger("tests.custom")
        strategy = CallAllStrategy()

        strategy.set_logger(custom)

        assert strategy.get_logger() is custom

    def test_log_attaches_context(self, caplog):
        """Test context entries end up on the log record."""
        caplog.set_level(logging.ERROR, logger=DEFAULT_LOGGER_NAME)
        error = RuntimeError("boom")

        CallAllStrategy().log(logging.ERROR, "something failed", {"adapter": "A", "exception": error})

        record = caplog.records[-1]
        assert record.getMessage() == "something failed"
        assert record.levelno == logging.ERROR
        assert record.adapter == "A"
        assert record.exc_info[1] is error

    def test_log_prefixes_keys_clashing_with_record_attributes(self, caplog):
        """Test context keys named like LogRecord attributes do not break logging."""
        caplog.set_level(logging.ERROR, logger=DEFAULT_LOGGER_NAME)

        CallAllStrategy().log(
            logging.ERROR,
            "clashing context",
            {"name": "A", "message": "m", "msg": "x", "args": (1,), "adapter": "A"},
        )

        record = caplog.records[-1]
        assert record.getMessage() == "clashing context"
        assert record.name == DEFAULT_LOGGER_NAME
        assert record.context_name == "A"
        assert record.context_message == "m"
        assert record.context_msg == "x"
        assert record.context_args == (1,)
        assert record.adapter == "A"

    def test_log_without_context(self, caplog):
        """Test the helper works without context."""
        caplog.set_level(logging.INFO, logger=DEFAULT_LOGGER_NAME)

        CallAllStrategy().log(logging.INFO, "plain message")

        assert caplog.records[-1].getMessage() == "plain message"
        assert caplog.records[-1].exc_info is None

    def test_strategy_name(self):
        """Test the call-all strategy identifies itself."""
        assert CallAllStrategy().get_strategy_name() == "CallAllStrategy"
