"""Tests for DecorpackContext."""

from pathlib import Path

from decorpack.core.codegen import RenderOptions
from decorpack.core.config_store import GlobalConfig, InMemoryConfigStore
from decorpack.core.context import DecorpackContext
from tests.fakes.archive import FakeArchiveWriter
from tests.fakes.time import FakeTime


def test_for_test_defaults() -> None:
    """for_test fills every dependency with a fake."""
    ctx = DecorpackContext.for_test()

    assert isinstance(ctx.config_store, InMemoryConfigStore)
    assert not ctx.config_store.exists()
    assert ctx.global_config == GlobalConfig.default()
    assert isinstance(ctx.time, FakeTime)
    assert isinstance(ctx.archive_writer, FakeArchiveWriter)
    assert ctx.cwd == Path("/test/default/cwd")


def test_for_test_global_config_seeds_store() -> None:
    config = GlobalConfig("Jane", Path("out"), 2)

    ctx = DecorpackContext.for_test(global_config=config)

    assert ctx.config_store.load() == config
    assert ctx.render_options == RenderOptions(indent_size=2)


def test_fake_time_year() -> None:
    assert DecorpackContext.for_test(time=FakeTime(year=2031)).time.current_year() == 2031
