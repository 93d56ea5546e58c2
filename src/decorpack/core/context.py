"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from decorpack.core.archive import ArchiveWriter, ZipArchiveWriter
from decorpack.core.codegen import RenderOptions
from decorpack.core.config_store import ConfigStore, FilesystemConfigStore, GlobalConfig
from decorpack.core.time.abc import Time
from decorpack.core.time.real import RealTime


@dataclass(frozen=True)
class DecorpackContext:
    """Immutable context holding all dependencies for decorpack commands.

    Created at CLI entry point and threaded through the application via
    ``click.Context.obj``. Tests pass their own instance built with
    ``for_test``.

    Note: global_config holds defaults when no config file exists yet.
    """

    config_store: ConfigStore
    global_config: GlobalConfig
    time: Time
    archive_writer: ArchiveWriter
    cwd: Path

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(indent_size=self.global_config.indent_size)

    @staticmethod
    def for_test(
        config_store: ConfigStore | None = None,
        global_config: GlobalConfig | None = None,
        time: Time | None = None,
        archive_writer: ArchiveWriter | None = None,
        cwd: Path | None = None,
    ) -> "DecorpackContext":
        """Create test context with optional pre-configured implementations.

        Args:
            config_store: Config store (defaults to an empty InMemoryConfigStore)
            global_config: Loaded config (defaults to the store's config or defaults)
            time: Clock (defaults to FakeTime)
            archive_writer: Archive writer (defaults to FakeArchiveWriter)
            cwd: Working directory (defaults to a sentinel path)

        Returns:
            DecorpackContext with fakes for every dependency not given

        Example:
            >>> from tests.fakes.time import FakeTime
            >>> ctx = DecorpackContext.for_test(time=FakeTime(year=2024))
        """
        from decorpack.core.config_store import InMemoryConfigStore
        from tests.fakes.archive import FakeArchiveWriter
        from tests.fakes.time import FakeTime

        if config_store is None:
            config_store = InMemoryConfigStore(config=global_config)

        if global_config is None:
            global_config = config_store.load_or_default()

        if time is None:
            time = FakeTime()

        if archive_writer is None:
            archive_writer = FakeArchiveWriter()

        if cwd is None:
            cwd = Path("/test/default/cwd")

        return DecorpackContext(
            config_store=config_store,
            global_config=global_config,
            time=time,
            archive_writer=archive_writer,
            cwd=cwd,
        )


def create_context() -> DecorpackContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Raises:
        ValueError: If an existing config file is malformed
    """
    config_store = FilesystemConfigStore()
    return DecorpackContext(
        config_store=config_store,
        global_config=config_store.load_or_default(),
        time=RealTime(),
        archive_writer=ZipArchiveWriter(),
        cwd=Path.cwd(),
    )
